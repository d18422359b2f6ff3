#!/usr/bin/env python3
"""
Lesson Export - lesson plan to Word/PDF exporter

Simple usage:
    python export_lessons.py plan.json                  # Outputs <title>.docx and <title>.pdf
    python export_lessons.py plans.json --combine Unit1 # One combined document per format
    python export_lessons.py plan.json -f pdf -s SLO-1  # PDF only, SLO-prefixed filename
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from lesson_export.cli import app

if __name__ == "__main__":
    app()
