"""Flow renderer: lesson plans as a word-processor paragraph/table tree.

The tree produced here is independent of any document library; the
DOCX handler lowers it into python-docx objects.
"""

from dataclasses import dataclass, field
from enum import Enum
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

BODY_FONT = "Calibri"
MATH_FONT = "Cambria Math"
BODY_SIZE = 11.0
DISPLAY_MATH_SIZE = 12.0
HEADER_SIZE = 12.0
HEADER_DISPLAY_MATH_SIZE = 13.0
PRODUCT_TITLE_SIZE = 18.0
HEADING_SIZE = 14.0
ACTIVITY_TITLE_SIZE = 12.0
HEADING_COLOR = "1F4E79"

# Border widths in eighths of a point
THICK_BORDER = 12
MEDIUM_BORDER = 6
THIN_BORDER = 2


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class FlowRun:
    """A run of characters with uniform character formatting.

    Attributes:
        text: Run text
        bold: Bold weight
        italic: Italic slant
        font: Font name, or None for the document default
        size: Font size in points, or None for the document default
        color: Hex RGB color, or None for the default
    """

    text: str
    bold: bool = False
    italic: bool = False
    font: Optional[str] = None
    size: Optional[float] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class FlowParagraph:
    """A paragraph of runs."""

    runs: tuple[FlowRun, ...] = field(default_factory=tuple)
    role: BlockRole = BlockRole.BODY
    alignment: Alignment = Alignment.LEFT

    @property
    def plain_text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class FlowHeading:
    """A section heading, underlined with a bottom border."""

    role: ClassVar[BlockRole] = BlockRole.HEADING

    text: str
    color: str = HEADING_COLOR
    size: float = HEADING_SIZE

    @property
    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class FlowBulletList:
    """Consecutive bulleted paragraphs."""

    role: ClassVar[BlockRole] = BlockRole.BULLET_LIST

    items: tuple[FlowParagraph, ...] = field(default_factory=tuple)

    @property
    def plain_text(self) -> str:
        return "\n".join(item.plain_text for item in self.items)


@dataclass(frozen=True)
class FlowTableCell:
    """A table cell.

    Attributes:
        paragraphs: Cell content
        column_span: Number of grid columns covered
        top_border: Top border width (eighths of a point), 0 for none
        bottom_border: Bottom border width, 0 for none
    """

    paragraphs: tuple[FlowParagraph, ...] = field(default_factory=tuple)
    column_span: int = 1
    top_border: int = 0
    bottom_border: int = 0

    @property
    def plain_text(self) -> str:
        return "\n".join(p.plain_text for p in self.paragraphs)


@dataclass(frozen=True)
class FlowTableRow:
    cells: tuple[FlowTableCell, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FlowTable:
    """A full-width table laid out on a fixed column grid."""

    role: ClassVar[BlockRole] = BlockRole.HEADER

    rows: tuple[FlowTableRow, ...] = field(default_factory=tuple)
    columns: int = 4

    @property
    def plain_text(self) -> str:
        return "\n".join(
            cell.plain_text for row in self.rows for cell in row.cells
        )


@dataclass(frozen=True)
class SectionBreak:
    """Start the following content in a new section on a new page."""

    role: ClassVar[BlockRole] = BlockRole.BREAK

    @property
    def plain_text(self) -> str:
        return ""


FlowNode = FlowTable | FlowHeading | FlowParagraph | FlowBulletList | SectionBreak


@dataclass(frozen=True)
class FlowTree(RenderedTree[FlowNode]):
    """Word-processor document tree."""

    @property
    def section_count(self) -> int:
        """Number of document sections (one more than the breaks)."""
        return len(self.break_positions()) + 1


def span_to_run(span: Span) -> FlowRun:
    """Lower a span to a run using the shared style table."""
    fmt = format_for(span.style)
    return FlowRun(
        text=span.text,
        bold=fmt.bold,
        italic=fmt.italic,
        font=MATH_FONT if fmt.math else BODY_FONT,
        size=DISPLAY_MATH_SIZE if fmt.display else BODY_SIZE,
    )


class FlowRenderer(SectionRenderer[FlowNode, FlowTree]):
    """Render lesson plans as headings, paragraphs, lists and a header table."""

    def _make_tree(self, nodes: list[FlowNode]) -> FlowTree:
        return FlowTree(tuple(nodes))

    def _runs(self, text: RichText) -> tuple[FlowRun, ...]:
        return tuple(span_to_run(span) for span in text)

    def _header_runs(self, header: HeaderField, bold: bool) -> tuple[FlowRun, ...]:
        runs: list[FlowRun] = []
        if header.prefix:
            runs.append(FlowRun(header.prefix, bold=bold, font=BODY_FONT, size=HEADER_SIZE))
        for span in header.value:
            fmt = format_for(span.style)
            runs.append(
                FlowRun(
                    span.text,
                    bold=bold or fmt.bold or header.emphasize_value,
                    italic=fmt.italic,
                    font=MATH_FONT if fmt.math else BODY_FONT,
                    size=HEADER_DISPLAY_MATH_SIZE if fmt.display else HEADER_SIZE,
                )
            )
        return tuple(runs)

    def _header(self, fields: HeaderFields) -> FlowTable:
        institution, product = fields.title_lines
        title_cell = FlowTableCell(
            paragraphs=(
                FlowParagraph(
                    (FlowRun(institution.plain_text, bold=True, font=BODY_FONT, size=HEADER_SIZE),),
                    alignment=Alignment.CENTER,
                ),
                FlowParagraph(
                    (FlowRun(product.plain_text, bold=True, font=BODY_FONT, size=PRODUCT_TITLE_SIZE),),
                    alignment=Alignment.CENTER,
                ),
            ),
            column_span=4,
            top_border=THICK_BORDER,
            bottom_border=THICK_BORDER,
        )

        detail_cells = tuple(
            FlowTableCell(paragraphs=(FlowParagraph(self._header_runs(f, bold=True)),))
            for f in fields.detail_row
        )

        # Topic, objective and teacher rows each span the full width
        topic, objective, teacher = fields.full_width_rows
        full_rows = (
            FlowTableRow((
                FlowTableCell(
                    (FlowParagraph(self._header_runs(topic, bold=False)),),
                    column_span=4,
                    top_border=MEDIUM_BORDER,
                ),
            )),
            FlowTableRow((
                FlowTableCell(
                    (FlowParagraph(self._header_runs(objective, bold=False)),),
                    column_span=4,
                    top_border=THIN_BORDER,
                ),
            )),
            FlowTableRow((
                FlowTableCell(
                    (FlowParagraph(self._header_runs(teacher, bold=False)),),
                    column_span=4,
                    top_border=THIN_BORDER,
                    bottom_border=THICK_BORDER,
                ),
            )),
        )

        return FlowTable(
            rows=(FlowTableRow((title_cell,)), FlowTableRow(detail_cells)) + full_rows,
            columns=4,
        )

    def _heading(self, text: str) -> FlowHeading:
        return FlowHeading(text)

    def _paragraph(self, text: RichText) -> FlowParagraph:
        return FlowParagraph(self._runs(text), alignment=Alignment.JUSTIFY)

    def _bullet_list(self, items: list[RichText]) -> FlowBulletList:
        return FlowBulletList(
            tuple(FlowParagraph(self._runs(item), role=BlockRole.BODY) for item in items)
        )

    def _placeholder(self, text: str) -> FlowParagraph:
        return FlowParagraph(
            (FlowRun(text, font=BODY_FONT, size=BODY_SIZE),),
            role=BlockRole.PLACEHOLDER,
            alignment=Alignment.JUSTIFY,
        )

    def _activity_title(self, text: str) -> FlowParagraph:
        return FlowParagraph(
            (FlowRun(text, bold=True, font=BODY_FONT, size=ACTIVITY_TITLE_SIZE),),
            role=BlockRole.ACTIVITY_TITLE,
        )

    def _break(self) -> SectionBreak:
        return SectionBreak()


def render_flow(
    plan: LessonPlan, placeholders: Optional[HeaderPlaceholders] = None
) -> FlowTree:
    """Render one lesson plan with the flow backend."""
    return FlowRenderer(placeholders).render(plan)


def render_flow_batch(
    plans: Iterable[LessonPlan], placeholders: Optional[HeaderPlaceholders] = None
) -> FlowTree:
    """Render several lesson plans into one flow tree with section breaks."""
    return FlowRenderer(placeholders).render_batch(plans)
