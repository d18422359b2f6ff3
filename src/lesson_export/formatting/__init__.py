"""Formatting utilities for tokenizing lesson-plan markup."""

from lesson_export.formatting.ir import (
    STYLE_DELIMITERS,
    RichText,
    Span,
    SpanStyle,
)
from lesson_export.formatting.parser import (
    MarkupTokenizer,
    parse_rich_text,
    tokenize,
)
from lesson_export.formatting.styles import SPAN_FORMATS, SpanFormat, format_for

__all__ = [
    "STYLE_DELIMITERS",
    "RichText",
    "Span",
    "SpanStyle",
    "MarkupTokenizer",
    "parse_rich_text",
    "tokenize",
    "SPAN_FORMATS",
    "SpanFormat",
    "format_for",
]
