"""
Package entry point.

Allows running the application via:

    python -m studycal

This simply forwards execution to studycal.cli.main().
"""

from studycal.cli import main

if __name__ == "__main__":
    main()
