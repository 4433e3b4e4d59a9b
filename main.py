"""Command-line Entry Point - Root Module.

This is the root-level entry point for running the viewer locally.
It imports from the src package.
"""

import sys

from src.main import main

__all__ = [
    "main",
]


if __name__ == "__main__":
    sys.exit(main())
