"""Core data model and filename helpers for Lesson Export.

The export orchestrator lives in :mod:`lesson_export.core.exporter`.
"""

from lesson_export.core.filenames import sanitize_filename, unique_filenames
from lesson_export.core.models import (
    Activity,
    LessonPlan,
    LessonPlanError,
    load_lesson_plans,
)

__all__ = [
    "sanitize_filename",
    "unique_filenames",
    "Activity",
    "LessonPlan",
    "LessonPlanError",
    "load_lesson_plans",
]
