#!/usr/bin/env python3
"""
NearSky Tracker Script

Usage:
    python scripts/track.py [--config CONFIG_FILE] [--once]
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nearsky.cli import main


if __name__ == "__main__":
    sys.exit(main())
