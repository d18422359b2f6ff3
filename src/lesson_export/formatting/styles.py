"""Span style table shared by the document renderers.

Each backend lowers these semantic attributes into its own run or
fragment properties.
"""

from dataclasses import dataclass

from lesson_export.formatting.ir import SpanStyle


@dataclass(frozen=True)
class SpanFormat:
    """Semantic formatting for one span style.

    Attributes:
        bold: Render the span in a bold weight
        italic: Render the span slanted
        math: The span is mathematics and needs the backend's math treatment
        display: The span is a displayed formula, set larger than body text
    """

    bold: bool = False
    italic: bool = False
    math: bool = False
    display: bool = False


SPAN_FORMATS: dict[SpanStyle, SpanFormat] = {
    SpanStyle.PLAIN: SpanFormat(),
    SpanStyle.BOLD: SpanFormat(bold=True),
    SpanStyle.ITALIC: SpanFormat(italic=True),
    SpanStyle.INLINE_MATH: SpanFormat(bold=True, math=True),
    SpanStyle.DISPLAY_MATH: SpanFormat(bold=True, math=True, display=True),
}


def format_for(style: SpanStyle) -> SpanFormat:
    """Look up the semantic formatting of a span style."""
    return SPAN_FORMATS[style]
