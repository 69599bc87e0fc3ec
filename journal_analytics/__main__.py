"""Entry point for running journal_analytics as a module.

Usage:
    python -m journal_analytics [--root DIR] [command] [options]

Examples:
    python -m journal_analytics seed demo --seed 7
    python -m journal_analytics summary demo --from 2024-03-01
    python -m journal_analytics export demo --formats csv,xlsx
"""

import sys

from journal_analytics.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
