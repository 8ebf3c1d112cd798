#!/usr/bin/env python3
"""
Music academy back office.

Usage:
    python run_academy.py --username USER --password PASS COMMAND ...

See `python run_academy.py --help` for the commands.
"""

import sys

from academy.cli import main


if __name__ == "__main__":
    sys.exit(main())
