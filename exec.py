#!/usr/bin/env python3
"""
Development entry point: run the CLI from a source checkout without installing.
"""

import sys
from pathlib import Path

src_path = Path(__file__).parent / 'src'
if src_path.exists():
    sys.path.insert(0, str(src_path))

from examplecloud.cli.main import main

if __name__ == "__main__":
    main()
