"""Entry point for running cmdp as a module."""

# No try/except here: main() in cli.py is the error boundary for startup
# and for the interactive session.

import sys

from cmdp.cli import main

if __name__ == "__main__":
    sys.exit(main())
