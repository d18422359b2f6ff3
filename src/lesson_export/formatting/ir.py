"""Intermediate Representation for lesson-plan rich text.

This module defines the format-agnostic data structures that sit between
the markup tokenizer and the document renderers. Every text field of a
lesson plan is lowered to a sequence of styled spans before any backend
sees it, so both output formats agree on which text is emphasised.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class SpanStyle(Enum):
    """Inline style of a span. Exactly one style applies to each span."""

    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    INLINE_MATH = "inline_math"
    DISPLAY_MATH = "display_math"


# Delimiters written around a span body for each style.
STYLE_DELIMITERS: dict[SpanStyle, str] = {
    SpanStyle.PLAIN: "",
    SpanStyle.BOLD: "**",
    SpanStyle.ITALIC: "*",
    SpanStyle.INLINE_MATH: "$",
    SpanStyle.DISPLAY_MATH: "$$",
}


@dataclass(frozen=True)
class Span:
    """A contiguous run of text tagged with one inline style.

    Attributes:
        text: The span body with markup delimiters removed
        style: The inline style of the body
    """

    text: str
    style: SpanStyle = SpanStyle.PLAIN

    def to_markup(self) -> str:
        """Return the span body wrapped in its delimiters."""
        delimiter = STYLE_DELIMITERS[self.style]
        return f"{delimiter}{self.text}{delimiter}"

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class RichText:
    """An ordered, non-overlapping sequence of spans for one text field.

    Attributes:
        spans: The spans in reading order
    """

    spans: tuple[Span, ...] = field(default_factory=tuple)

    @property
    def plain_text(self) -> str:
        """Get the text content without styling."""
        return "".join(span.text for span in self.spans)

    @property
    def is_empty(self) -> bool:
        return not self.spans

    def to_markup(self) -> str:
        """Rebuild a markup string from the spans."""
        return "".join(span.to_markup() for span in self.spans)

    def styles(self) -> list[SpanStyle]:
        """List the style of every span, in order."""
        return [span.style for span in self.spans]

    def __iter__(self) -> Iterator[Span]:
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)

    def __str__(self) -> str:
        return self.plain_text
