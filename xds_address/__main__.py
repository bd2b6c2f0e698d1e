"""
Entry point for running the CLI as a module.

Usage:
    python -m xds_address
"""

from xds_address.cli import main

if __name__ == "__main__":
    main()
