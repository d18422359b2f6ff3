"""Allow running as ``python -m lesson_export``."""

from lesson_export.cli import app

if __name__ == "__main__":
    app()
