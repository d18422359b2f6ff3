"""Lesson Export - render lesson plans to Word and PDF documents."""

__version__ = "0.1.0"
