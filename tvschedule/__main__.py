"""
Package entry point.

Allows running the application via:

    python -m tvschedule

This simply forwards execution to tvschedule.cli.main().
"""

from tvschedule.cli import main

if __name__ == "__main__":
    main()
