#!/usr/bin/env python3
"""
mca — MCA assembler command interface

Usage:
    python mca.py [input] [output] [--engine MODULE:CALLABLE] [-v]

See ``python mca.py --help`` for all options.
"""

import sys
import os

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mca_shell.cli import main


if __name__ == "__main__":
    main()
