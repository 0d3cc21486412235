"""
Entry point for running typelint as a module.

Usage:
    python -m typelint scan ./src
    python -m typelint --help
"""

import sys
from typelint.cli import main

if __name__ == "__main__":
    sys.exit(main())
