#!/usr/bin/env python3
"""
PollWatch launcher for running from a source checkout.

Requires Python 3.11+.

Usage:
    python scripts/watch.py make test
"""

import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from cli.main import main


if __name__ == "__main__":
    sys.exit(main())
