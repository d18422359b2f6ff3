"""Document encoders for Lesson Export."""

from lesson_export.formats.base import ExportTarget, FormatHandler
from lesson_export.formats.docx_handler import DOCXHandler
from lesson_export.formats.pdf_handler import PDFHandler

__all__ = [
    "ExportTarget",
    "FormatHandler",
    "DOCXHandler",
    "PDFHandler",
]

# Map export targets to handlers
HANDLER_MAP: dict[ExportTarget, type[FormatHandler]] = {
    ExportTarget.FLOW: DOCXHandler,
    ExportTarget.PAGE: PDFHandler,
}

SUPPORTED_EXTENSIONS = tuple(target.extension for target in HANDLER_MAP)


def get_handler(target: ExportTarget | str) -> type[FormatHandler]:
    """Get the handler class for an export target or file extension."""
    key = str(target.value if isinstance(target, ExportTarget) else target).lower().lstrip(".")
    for candidate in HANDLER_MAP:
        if candidate.value == key:
            return HANDLER_MAP[candidate]
    raise ValueError(
        f"Unsupported export format: {target}. "
        f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
    )
