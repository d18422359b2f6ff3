"""PDF encoder for page trees."""

import logging
from io import BytesIO

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    ListFlowable,
    ListItem,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Table,
    TableStyle,
)

from lesson_export.formats.base import ExportTarget, FormatHandler
from lesson_export.rendering.page import (
    ListBlock,
    PageBreakBlock,
    PageTree,
    SectionHeaderBlock,
    TableBlock,
    TextBlock,
)

logger = logging.getLogger(__name__)

SECTION_HEADER_COLOR = HexColor("#1F4E79")
RULE_COLOR = HexColor("#AAAAAA")
PAGE_MARGIN = 0.4 * inch


class PDFHandler(FormatHandler[PageTree]):
    """Encoder for PDF files.

    Uses reportlab platypus flowables. Text blocks become Paragraphs with
    HTML-like inline tags, tables keep their column spans, and every
    PageBreakBlock becomes a hard page break.
    """

    @property
    def target(self) -> ExportTarget:
        return ExportTarget.PAGE

    def encode(self, tree: PageTree) -> bytes:
        """Lay out a page tree and return the PDF bytes."""
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=PAGE_MARGIN,
            leftMargin=PAGE_MARGIN,
            topMargin=PAGE_MARGIN,
            bottomMargin=PAGE_MARGIN,
        )
        doc.build(self.build_story(tree, doc.width))
        logger.debug("Built PDF with %d blocks", len(tree))
        return buffer.getvalue()

    def build_story(self, tree: PageTree, width: float = 7.5 * inch) -> list:
        """Convert a page tree to a list of reportlab flowables."""
        styles = self._create_styles()
        story: list = []

        for node in tree:
            if isinstance(node, TableBlock):
                story.append(self._render_table(node, styles, width))
            elif isinstance(node, SectionHeaderBlock):
                story.append(Paragraph(
                    f"<u>{self._escape(node.text)}</u>",
                    styles[node.style],
                ))
            elif isinstance(node, ListBlock):
                story.append(self._render_list(node, styles))
            elif isinstance(node, TextBlock):
                story.append(Paragraph(self._block_to_html(node), styles[node.style]))
            elif isinstance(node, PageBreakBlock):
                story.append(PageBreak())
            else:
                raise TypeError(f"Unsupported page node: {type(node).__name__}")

        return story

    def _create_styles(self) -> dict[str, ParagraphStyle]:
        """Create all paragraph styles for the document."""
        base_styles = getSampleStyleSheet()
        return {
            "body": ParagraphStyle(
                "LessonBody",
                parent=base_styles["Normal"],
                fontSize=10,
                leading=12,
                alignment=TA_JUSTIFY,
                spaceAfter=4,
            ),
            "header_title": ParagraphStyle(
                "HeaderTitle",
                parent=base_styles["Normal"],
                fontName="Helvetica-Bold",
                fontSize=14,
                leading=17,
                alignment=TA_CENTER,
                spaceBefore=2,
                spaceAfter=2,
            ),
            "header_body": ParagraphStyle(
                "HeaderBody",
                parent=base_styles["Normal"],
                fontName="Helvetica",
                fontSize=9,
                leading=11,
                alignment=TA_LEFT,
            ),
            "section_header": ParagraphStyle(
                "SectionHeader",
                parent=base_styles["Heading3"],
                fontSize=12,
                leading=14,
                textColor=SECTION_HEADER_COLOR,
                spaceBefore=15,
                spaceAfter=5,
            ),
            "activity_title": ParagraphStyle(
                "ActivityTitle",
                parent=base_styles["Normal"],
                fontSize=10,
                leading=12,
                spaceBefore=8,
                spaceAfter=4,
            ),
        }

    def _escape(self, text: str) -> str:
        return (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace("\n", "<br/>")
        )

    def _block_to_html(self, block: TextBlock) -> str:
        """Convert a TextBlock to HTML-formatted string for reportlab."""
        parts: list[str] = []

        for fragment in block.fragments:
            text = self._escape(fragment.text)

            if fragment.bold and fragment.italic:
                text = f"<b><i>{text}</i></b>"
            elif fragment.bold:
                text = f"<b>{text}</b>"
            elif fragment.italic:
                text = f"<i>{text}</i>"

            if fragment.font_size:
                text = f'<font size="{fragment.font_size:g}">{text}</font>'

            parts.append(text)

        return "".join(parts)

    def _render_list(self, block: ListBlock, styles: dict[str, ParagraphStyle]) -> ListFlowable:
        items = [
            ListItem(Paragraph(self._block_to_html(item), styles[item.style]))
            for item in block.items
        ]
        return ListFlowable(items, bulletType="bullet", start="bulletchar", leftIndent=12)

    def _render_table(
        self, block: TableBlock, styles: dict[str, ParagraphStyle], width: float
    ) -> Table:
        """Render a table block with spans and light horizontal rules."""
        data: list[list] = []
        commands: list[tuple] = [
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), 4),
            ("RIGHTPADDING", (0, 0), (-1, -1), 4),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]

        for row_index, row in enumerate(block.rows):
            cells: list = []
            for cell in row:
                column = len(cells)
                cells.append([
                    Paragraph(self._block_to_html(b), styles[b.style]) for b in cell.blocks
                ])
                if cell.col_span > 1:
                    commands.append((
                        "SPAN",
                        (column, row_index),
                        (column + cell.col_span - 1, row_index),
                    ))
                    cells.extend([""] * (cell.col_span - 1))
            cells.extend([""] * (block.columns - len(cells)))
            data.append(cells)

        if block.layout == "lightHorizontalLines":
            commands.extend([
                ("LINEBELOW", (0, 0), (-1, 0), 1, SECTION_HEADER_COLOR),
                ("LINEBELOW", (0, 1), (-1, -2), 0.5, RULE_COLOR),
            ])

        table = Table(data, colWidths=[width / block.columns] * block.columns)
        table.setStyle(TableStyle(commands))
        return table
