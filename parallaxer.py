#!/usr/bin/env python3
"""
Parallaxer - Convert 2D videos to side-by-side 3D using depth-based parallax
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from parallaxer.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
