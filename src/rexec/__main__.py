"""
rexec CLI entry point.

Usage:
    python -m rexec ls
    python -m rexec connect abc123
"""

from rexec.cli import main

if __name__ == "__main__":
    main()
