#!/usr/bin/env python3
"""
Export the JSON runtime copy of the career dataset to the CSV master copy.

Reads data/career-nodes.json and data/career-paths.json and overwrites
data/nodes.csv and data/paths.csv. A missing JSON file is skipped with a
warning. Run without arguments.
"""

import sys
import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from career_data.cli import export_main

if __name__ == "__main__":
    # Dataset and config paths are relative to the project root
    os.chdir(PROJECT_ROOT)
    sys.exit(export_main())
