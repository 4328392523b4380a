"""
Main entry point for running the package as a module.

Uses the Click-based CLI from perfsheet/cli/.
"""
import sys

from perfsheet.cli import main

if __name__ == "__main__":
    sys.exit(main())
