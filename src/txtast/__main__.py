"""
Main entry point for the text AST converter when run as a module.
"""

import sys

from txtast.cli import main

if __name__ == '__main__':
    sys.exit(main())
