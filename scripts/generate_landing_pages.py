#!/usr/bin/env python3
"""
Generate static product landing pages.

Usage:
    python3 scripts/generate_landing_pages.py --help
"""

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from landing.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
