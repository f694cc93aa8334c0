#!/usr/bin/env python3
"""
Open the teacher data cache debug page.

Usage:
    python run.py                     # Inspect the configured cache file
    python run.py path/to/cache.db    # Inspect another cache file
"""

import os
import subprocess
import sys
from pathlib import Path

page = Path(__file__).parent / "web" / "streamlit" / "app.py"
env = dict(os.environ)
if len(sys.argv) > 1:
    env["ATTENDANCE_CACHE_PATH"] = sys.argv[1]
subprocess.run([sys.executable, "-m", "streamlit", "run", str(page)], env=env)
