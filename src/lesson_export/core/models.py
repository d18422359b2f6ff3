"""Lesson-plan data model.

Lesson plans arrive from an external generation step as JSON objects
with camelCase keys. They are loaded into immutable dataclasses here and
never modified afterwards.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


class LessonPlanError(ValueError):
    """Lesson-plan data is missing fields or has the wrong shape."""

    pass


def _require_str(data: dict, *keys: str, default: Optional[str] = None) -> str:
    """Fetch the first present key as a string."""
    for key in keys:
        if key in data and data[key] is not None:
            value = data[key]
            if not isinstance(value, str):
                raise LessonPlanError(
                    f"Field '{key}' must be a string, got {type(value).__name__}"
                )
            return value
    if default is not None:
        return default
    raise LessonPlanError(f"Missing required field '{keys[0]}'")


@dataclass(frozen=True)
class Activity:
    """One timed step of the lesson procedure.

    Attributes:
        name: Short activity name
        duration: Length in minutes (positive)
        description: Markup text describing the activity
    """

    name: str
    duration: int
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Activity":
        if not isinstance(data, dict):
            raise LessonPlanError("Each activity must be an object")

        duration = data.get("duration")
        # bool is an int subclass
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise LessonPlanError(
                f"Activity duration must be an integer number of minutes, got {duration!r}"
            )
        if duration <= 0:
            raise LessonPlanError(f"Activity duration must be positive, got {duration}")

        return cls(
            name=_require_str(data, "name"),
            duration=duration,
            description=_require_str(data, "description", default=""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "duration": self.duration,
            "description": self.description,
        }


@dataclass(frozen=True)
class LessonPlan:
    """A complete lesson plan as supplied by the generation step.

    Attributes:
        title: Lesson topic
        objective: Learning objective
        grade_level: Grade description, e.g. "9th Grade"
        subject: Subject name
        materials: Resources in presentation order (duplicates allowed)
        activities: Procedure steps in presentation order
        assessment: Assessment text
        homework: Homework text (may be empty)
        summary: Lesson summary (may be empty)
    """

    title: str
    objective: str
    grade_level: str
    subject: str
    materials: tuple[str, ...] = field(default_factory=tuple)
    activities: tuple[Activity, ...] = field(default_factory=tuple)
    assessment: str = ""
    homework: str = ""
    summary: str = ""

    @property
    def grade_short(self) -> str:
        """First whitespace-delimited token of the grade level.

        Falls back to the full grade string when it holds no token.
        """
        tokens = self.grade_level.split()
        return tokens[0] if tokens else self.grade_level

    @property
    def total_duration(self) -> int:
        """Sum of all activity durations in minutes."""
        return sum(activity.duration for activity in self.activities)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LessonPlan":
        """Build a LessonPlan from a JSON-style dictionary.

        Accepts both the camelCase keys of the generation service
        (``gradeLevel``) and snake_case keys (``grade_level``).

        Raises:
            LessonPlanError: If required fields are missing or malformed
        """
        if not isinstance(data, dict):
            raise LessonPlanError("A lesson plan must be a JSON object")

        materials = data.get("materials") or []
        if not isinstance(materials, list) or not all(
            isinstance(m, str) for m in materials
        ):
            raise LessonPlanError("Field 'materials' must be a list of strings")

        activities = data.get("activities") or []
        if not isinstance(activities, list):
            raise LessonPlanError("Field 'activities' must be a list")

        return cls(
            title=_require_str(data, "title"),
            objective=_require_str(data, "objective"),
            grade_level=_require_str(data, "gradeLevel", "grade_level"),
            subject=_require_str(data, "subject"),
            materials=tuple(materials),
            activities=tuple(Activity.from_dict(a) for a in activities),
            assessment=_require_str(data, "assessment", default=""),
            homework=_require_str(data, "homework", default=""),
            summary=_require_str(data, "summary", default=""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the generation service."""
        return {
            "title": self.title,
            "objective": self.objective,
            "gradeLevel": self.grade_level,
            "subject": self.subject,
            "materials": list(self.materials),
            "activities": [a.to_dict() for a in self.activities],
            "assessment": self.assessment,
            "homework": self.homework,
            "summary": self.summary,
        }


def load_lesson_plans(path: Path) -> list[LessonPlan]:
    """Load one or more lesson plans from a JSON file.

    The file may hold a single plan object or a list of plan objects.

    Args:
        path: Path to the JSON file

    Returns:
        Lesson plans in file order

    Raises:
        LessonPlanError: If the file cannot be read as UTF-8 JSON or a plan
            is malformed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise LessonPlanError(f"{path.name} is not UTF-8 encoded: {e}") from e
    except OSError as e:
        raise LessonPlanError(f"Could not read {path.name}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LessonPlanError(f"Invalid JSON in {path.name}: {e}") from e

    if isinstance(data, dict):
        return [LessonPlan.from_dict(data)]
    if isinstance(data, list):
        return [LessonPlan.from_dict(item) for item in data]
    raise LessonPlanError(f"{path.name} must contain a lesson plan or a list of them")
