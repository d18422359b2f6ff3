"""Renderers lowering lesson plans into document trees."""

from lesson_export.rendering.base import (
    ASSESSMENT_HEADING,
    HOMEWORK_HEADING,
    PROCEDURE_HEADING,
    PRODUCT_TITLE,
    RESOURCES_HEADING,
    SUMMARY_HEADING,
    BlockRole,
    HeaderField,
    HeaderFields,
    RenderedTree,
    SectionRenderer,
    activity_title,
)
from lesson_export.rendering.flow import (
    FlowRenderer,
    FlowTree,
    SectionBreak,
    render_flow,
    render_flow_batch,
)
from lesson_export.rendering.page import (
    PageBreakBlock,
    PageRenderer,
    PageTree,
    render_page,
    render_page_batch,
)

__all__ = [
    "ASSESSMENT_HEADING",
    "HOMEWORK_HEADING",
    "PROCEDURE_HEADING",
    "PRODUCT_TITLE",
    "RESOURCES_HEADING",
    "SUMMARY_HEADING",
    "BlockRole",
    "HeaderField",
    "HeaderFields",
    "RenderedTree",
    "SectionRenderer",
    "activity_title",
    "FlowRenderer",
    "FlowTree",
    "SectionBreak",
    "render_flow",
    "render_flow_batch",
    "PageBreakBlock",
    "PageRenderer",
    "PageTree",
    "render_page",
    "render_page_batch",
]
