"""Page renderer: lesson plans as a list of print content blocks.

Blocks reference named paragraph styles (``body``, ``section_header``,
...) that the PDF handler maps to reportlab styles.
"""

from dataclasses import dataclass, field, replace
from typing import ClassVar, Iterable, Optional

from lesson_export.config import HeaderPlaceholders
from lesson_export.core.models import LessonPlan
from lesson_export.formatting.ir import RichText, Span
from lesson_export.formatting.styles import format_for
from lesson_export.rendering.base import (
    BlockRole,
    HeaderField,
    HeaderFields,
    RenderedTree,
    SectionRenderer,
)

DISPLAY_MATH_FONT_SIZE = 12.0


@dataclass(frozen=True)
class TextFragment:
    """A piece of text with inline styling.

    Attributes:
        text: Fragment text
        bold: Bold weight
        italic: Italic slant
        font_size: Size in points, or None to inherit from the block style
    """

    text: str
    bold: bool = False
    italic: bool = False
    font_size: Optional[float] = None


@dataclass(frozen=True)
class TextBlock:
    """A paragraph of fragments rendered with a named style."""

    fragments: tuple[TextFragment, ...] = field(default_factory=tuple)
    style: str = "body"
    role: BlockRole = BlockRole.BODY

    @property
    def plain_text(self) -> str:
        return "".join(f.text for f in self.fragments)


@dataclass(frozen=True)
class SectionHeaderBlock:
    role: ClassVar[BlockRole] = BlockRole.HEADING

    text: str
    style: str = "section_header"

    @property
    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class ListBlock:
    """An unordered (bulleted) list."""

    role: ClassVar[BlockRole] = BlockRole.BULLET_LIST

    items: tuple[TextBlock, ...] = field(default_factory=tuple)

    @property
    def plain_text(self) -> str:
        return "\n".join(item.plain_text for item in self.items)


@dataclass(frozen=True)
class TableCellBlock:
    """A table cell holding one or more text blocks.

    Attributes:
        blocks: Cell paragraphs
        col_span: Number of columns covered
    """

    blocks: tuple[TextBlock, ...] = field(default_factory=tuple)
    col_span: int = 1

    @property
    def plain_text(self) -> str:
        return "\n".join(b.plain_text for b in self.blocks)


@dataclass(frozen=True)
class TableBlock:
    """A table with equal-width columns and light horizontal rules."""

    role: ClassVar[BlockRole] = BlockRole.HEADER

    rows: tuple[tuple[TableCellBlock, ...], ...] = field(default_factory=tuple)
    columns: int = 4
    layout: str = "lightHorizontalLines"

    @property
    def plain_text(self) -> str:
        return "\n".join(cell.plain_text for row in self.rows for cell in row)


@dataclass(frozen=True)
class PageBreakBlock:
    """Force the following content onto a new page."""

    role: ClassVar[BlockRole] = BlockRole.BREAK

    @property
    def plain_text(self) -> str:
        return ""


PageNode = TableBlock | SectionHeaderBlock | TextBlock | ListBlock | PageBreakBlock


@dataclass(frozen=True)
class PageTree(RenderedTree[PageNode]):
    """Print document content list."""

    @property
    def page_breaks(self) -> int:
        return len(self.break_positions())


def span_to_fragment(span: Span) -> TextFragment:
    """Lower a span to a text fragment using the shared style table.

    Math has no dedicated font in print output, so it is set bold italic.
    """
    fmt = format_for(span.style)
    return TextFragment(
        text=span.text,
        bold=fmt.bold,
        italic=fmt.italic or fmt.math,
        font_size=DISPLAY_MATH_FONT_SIZE if fmt.display else None,
    )


class PageRenderer(SectionRenderer[PageNode, PageTree]):
    """Render lesson plans as print content blocks."""

    def _make_tree(self, nodes: list[PageNode]) -> PageTree:
        return PageTree(tuple(nodes))

    def _fragments(self, text: RichText) -> tuple[TextFragment, ...]:
        return tuple(span_to_fragment(span) for span in text)

    def _field_block(self, header: HeaderField, bold: bool) -> TextBlock:
        """Build a header cell paragraph.

        Labels are always bold. Values keep their span styling and are
        bolded as a whole only for detail cells and emphasized fields.
        """
        fragments: list[TextFragment] = []
        if header.prefix:
            fragments.append(TextFragment(header.prefix, bold=True))
        for fragment in self._fragments(header.value):
            if bold or header.emphasize_value:
                fragment = replace(fragment, bold=True)
            fragments.append(fragment)
        return TextBlock(tuple(fragments), style="header_body")

    def _header(self, fields: HeaderFields) -> TableBlock:
        title_cell = TableCellBlock(
            blocks=tuple(
                TextBlock((TextFragment(f.plain_text),), style="header_title")
                for f in fields.title_lines
            ),
            col_span=4,
        )
        detail_row = tuple(
            TableCellBlock((self._field_block(f, bold=True),))
            for f in fields.detail_row
        )
        full_rows = tuple(
            (TableCellBlock((self._field_block(f, bold=False),), col_span=4),)
            for f in fields.full_width_rows
        )
        return TableBlock(rows=((title_cell,), detail_row) + full_rows)

    def _heading(self, text: str) -> SectionHeaderBlock:
        return SectionHeaderBlock(text)

    def _paragraph(self, text: RichText) -> TextBlock:
        return TextBlock(self._fragments(text))

    def _bullet_list(self, items: list[RichText]) -> ListBlock:
        return ListBlock(tuple(TextBlock(self._fragments(item)) for item in items))

    def _placeholder(self, text: str) -> TextBlock:
        return TextBlock((TextFragment(text),), role=BlockRole.PLACEHOLDER)

    def _activity_title(self, text: str) -> TextBlock:
        return TextBlock(
            (TextFragment(text, bold=True),),
            style="activity_title",
            role=BlockRole.ACTIVITY_TITLE,
        )

    def _break(self) -> PageBreakBlock:
        return PageBreakBlock()


def render_page(
    plan: LessonPlan, placeholders: Optional[HeaderPlaceholders] = None
) -> PageTree:
    """Render one lesson plan with the page backend."""
    return PageRenderer(placeholders).render(plan)


def render_page_batch(
    plans: Iterable[LessonPlan], placeholders: Optional[HeaderPlaceholders] = None
) -> PageTree:
    """Render several lesson plans into one page tree with page breaks."""
    return PageRenderer(placeholders).render_batch(plans)
