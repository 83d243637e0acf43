"""
Entry point for running the career data CLI as a module.

Usage:
    python -m career_data [command] [options]
"""

from .cli import main

if __name__ == '__main__':
    exit(main())
