"""Microsoft Word (.docx) encoder for flow trees."""

import logging
from io import BytesIO

from docx import Document
from docx.enum.section import WD_SECTION
from docx.enum.table import WD_ALIGN_VERTICAL, WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Pt, RGBColor

from lesson_export.formats.base import ExportTarget, FormatHandler
from lesson_export.rendering.base import BlockRole
from lesson_export.rendering.flow import (
    BODY_FONT,
    BODY_SIZE,
    Alignment,
    FlowBulletList,
    FlowHeading,
    FlowParagraph,
    FlowRun,
    FlowTable,
    FlowTree,
    SectionBreak,
)

logger = logging.getLogger(__name__)

# 567 twips on every side
PAGE_MARGIN = Cm(1)

ALIGNMENTS = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.JUSTIFY: WD_ALIGN_PARAGRAPH.JUSTIFY,
}


class DOCXHandler(FormatHandler[FlowTree]):
    """Encoder for Microsoft Word (.docx) files.

    Uses python-docx to lower a flow tree into paragraphs, runs and
    tables. Every SectionBreak starts a new document section on a new page.
    """

    @property
    def target(self) -> ExportTarget:
        return ExportTarget.FLOW

    def encode(self, tree: FlowTree) -> bytes:
        buffer = BytesIO()
        self.build(tree).save(buffer)
        return buffer.getvalue()

    def build(self, tree: FlowTree) -> Document:
        """Create a python-docx Document from a flow tree."""
        doc = Document()

        # Set default font
        style = doc.styles["Normal"]
        font = style.font
        font.name = BODY_FONT
        font.size = Pt(BODY_SIZE)

        self._set_margins(doc.sections[0])

        for node in tree:
            if isinstance(node, FlowTable):
                self._add_table(doc, node)
            elif isinstance(node, FlowHeading):
                self._add_heading(doc, node)
            elif isinstance(node, FlowBulletList):
                for item in node.items:
                    para = doc.add_paragraph(style="List Bullet")
                    para.paragraph_format.space_after = Pt(2.5)
                    self._add_runs(para, item)
            elif isinstance(node, FlowParagraph):
                self._add_paragraph(doc, node)
            elif isinstance(node, SectionBreak):
                section = doc.add_section(WD_SECTION.NEW_PAGE)
                self._set_margins(section)
            else:
                raise TypeError(f"Unsupported flow node: {type(node).__name__}")

        logger.debug(
            "Built DOCX with %d blocks in %d section(s)",
            len(tree),
            len(doc.sections),
        )
        return doc

    def _set_margins(self, section) -> None:
        section.top_margin = PAGE_MARGIN
        section.bottom_margin = PAGE_MARGIN
        section.left_margin = PAGE_MARGIN
        section.right_margin = PAGE_MARGIN

    def _add_runs(self, para, paragraph: FlowParagraph) -> None:
        for run_data in paragraph.runs:
            self._add_run(para, run_data)

    def _add_run(self, para, run_data: FlowRun) -> None:
        run = para.add_run(run_data.text)
        run.bold = run_data.bold
        run.italic = run_data.italic
        if run_data.font:
            run.font.name = run_data.font
        if run_data.size:
            run.font.size = Pt(run_data.size)
        if run_data.color:
            run.font.color.rgb = RGBColor.from_string(run_data.color)

    def _add_paragraph(self, doc: Document, paragraph: FlowParagraph) -> None:
        para = doc.add_paragraph()
        para.alignment = ALIGNMENTS[paragraph.alignment]
        if paragraph.role is BlockRole.ACTIVITY_TITLE:
            para.paragraph_format.space_before = Pt(10)
            para.paragraph_format.space_after = Pt(5)
        else:
            para.paragraph_format.space_after = Pt(5)
        self._add_runs(para, paragraph)

    def _add_heading(self, doc: Document, heading: FlowHeading) -> None:
        """Add a section heading underlined with a paragraph border."""
        para = doc.add_paragraph()
        para.paragraph_format.space_before = Pt(15)
        para.paragraph_format.space_after = Pt(5)
        para.paragraph_format.keep_with_next = True

        run = para.add_run(heading.text)
        run.bold = True
        run.font.size = Pt(heading.size)
        run.font.color.rgb = RGBColor.from_string(heading.color)

        pPr = para._p.get_or_add_pPr()
        pBdr = OxmlElement("w:pBdr")
        bottom = OxmlElement("w:bottom")
        bottom.set(qn("w:val"), "single")
        bottom.set(qn("w:sz"), "6")
        bottom.set(qn("w:space"), "4")
        bottom.set(qn("w:color"), heading.color)
        pBdr.append(bottom)
        pPr.append(pBdr)

    def _add_table(self, doc: Document, table_data: FlowTable) -> None:
        """Add a table, merging cells across their column spans."""
        table = doc.add_table(rows=len(table_data.rows), cols=table_data.columns)
        table.alignment = WD_TABLE_ALIGNMENT.CENTER

        for row_data, row in zip(table_data.rows, table.rows):
            column = 0
            for cell_data in row_data.cells:
                cell = row.cells[column]
                last = column + cell_data.column_span - 1
                if last > column:
                    cell = cell.merge(row.cells[last])
                column = last + 1

                # tcBorders must precede vAlign in the cell properties
                self._set_cell_borders(cell, cell_data.top_border, cell_data.bottom_border)
                cell.vertical_alignment = WD_ALIGN_VERTICAL.CENTER

                for index, paragraph in enumerate(cell_data.paragraphs):
                    para = cell.paragraphs[0] if index == 0 else cell.add_paragraph()
                    para.alignment = ALIGNMENTS[paragraph.alignment]
                    self._add_runs(para, paragraph)

    def _set_cell_borders(self, cell, top: int, bottom: int) -> None:
        """Set top/bottom borders of a cell and clear the sides."""
        tcBorders = OxmlElement("w:tcBorders")
        for border_name, size in (("top", top), ("left", 0), ("bottom", bottom), ("right", 0)):
            border = OxmlElement(f"w:{border_name}")
            if size:
                border.set(qn("w:val"), "single")
                border.set(qn("w:sz"), str(size))
                border.set(qn("w:space"), "0")
                border.set(qn("w:color"), "auto")
            else:
                border.set(qn("w:val"), "nil")
            tcBorders.append(border)
        cell._tc.get_or_add_tcPr().append(tcBorders)
