#!/usr/bin/env python3
"""
Rebuild the JSON runtime copy of the career dataset from the CSV master copy.

Reads data/nodes.csv and data/paths.csv, warns about paths that reference
unknown node ids, and overwrites data/career-nodes.json and
data/career-paths.json. Exits with status 1 if either CSV file cannot be
read. Run without arguments.
"""

import sys
import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from career_data.cli import import_main

if __name__ == "__main__":
    # Dataset and config paths are relative to the project root
    os.chdir(PROJECT_ROOT)
    sys.exit(import_main())
