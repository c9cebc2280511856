"""
DrinkTender package __main__ entry point.

Allows running with: python -m drinktender
"""

import sys

from drinktender.app.cli import main

if __name__ == "__main__":
    sys.exit(main())
