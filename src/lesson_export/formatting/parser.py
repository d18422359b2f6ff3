"""Markup tokenizer for converting lesson-plan text to IR."""

import re
from typing import Optional

from lesson_export.formatting.ir import RichText, Span, SpanStyle


class MarkupTokenizer:
    """Tokenize the lesson-plan markup dialect into styled spans.

    Four inline constructs are recognised, tried in this order at every
    position of the input:

    - ``$$display math$$`` (may span lines, body is trimmed)
    - ``$inline math$`` (body must start and end with non-whitespace)
    - ``**bold**``
    - ``*italic*``

    Anything else is plain text. Delimiters that never close, or that
    enclose an empty body, are kept as literal characters.
    """

    # Characters that may open a delimiter
    MARKERS = re.compile(r"[$*]")

    def tokenize(self, text: str) -> list[Span]:
        """Convert markup text to an ordered list of spans.

        Args:
            text: Text containing the inline markup

        Returns:
            List of spans in reading order; empty for empty input
        """
        spans: list[Span] = []
        plain: list[str] = []
        pos = 0

        while pos < len(text):
            match = self._match_at(text, pos)
            if match is not None:
                span, pos = match
                if plain:
                    spans.append(Span("".join(plain), SpanStyle.PLAIN))
                    plain = []
                spans.append(span)
                continue

            # Plain text - jump to the next possible delimiter
            marker = self.MARKERS.search(text, pos + 1)
            end = marker.start() if marker else len(text)
            plain.append(text[pos:end])
            pos = end

        if plain:
            spans.append(Span("".join(plain), SpanStyle.PLAIN))

        return spans

    def parse(self, text: str) -> RichText:
        """Tokenize text and wrap the spans in a RichText."""
        return RichText(tuple(self.tokenize(text)))

    def _match_at(self, text: str, pos: int) -> Optional[tuple[Span, int]]:
        """Try each delimiter class at pos, in priority order.

        Returns:
            The matched span and the position just past it, or None
        """
        if text.startswith("$$", pos):
            end = text.find("$$", pos + 2)
            if end != -1:
                body = text[pos + 2 : end].strip()
                if body:
                    return Span(body, SpanStyle.DISPLAY_MATH), end + 2

        if text[pos] == "$":
            end = text.find("$", pos + 1)
            if end != -1:
                body = text[pos + 1 : end]
                if body and not body[0].isspace() and not body[-1].isspace():
                    return Span(body, SpanStyle.INLINE_MATH), end + 1

        if text.startswith("**", pos):
            end = text.find("**", pos + 2)
            if end != -1:
                body = text[pos + 2 : end]
                if body and "\n" not in body:
                    return Span(body, SpanStyle.BOLD), end + 2

        if text[pos] == "*":
            end = text.find("*", pos + 1)
            if end != -1:
                body = text[pos + 1 : end]
                if body and "\n" not in body:
                    return Span(body, SpanStyle.ITALIC), end + 1

        return None

    def to_plain_text(self, spans: list[Span]) -> str:
        """Join span texts without any markup."""
        return "".join(span.text for span in spans)

    def to_markup(self, spans: list[Span]) -> str:
        """Convert spans back to markup text."""
        return "".join(span.to_markup() for span in spans)


_tokenizer = MarkupTokenizer()


def tokenize(text: str) -> list[Span]:
    """Tokenize markup text with a shared tokenizer instance."""
    return _tokenizer.tokenize(text)


def parse_rich_text(text: str) -> RichText:
    """Tokenize markup text into a RichText value."""
    return _tokenizer.parse(text)
