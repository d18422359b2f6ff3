"""Pytest fixtures for Lesson Export tests."""

import json

import pytest
from pathlib import Path

from lesson_export.core.models import Activity, LessonPlan


@pytest.fixture
def sample_plan() -> LessonPlan:
    """A lesson plan exercising every markup construct."""
    return LessonPlan(
        title="Newton's Second Law",
        objective="Students will apply $F=ma$ to **everyday** problems.",
        grade_level="9th Grade",
        subject="Physics",
        materials=("Spring scale", "**Trolley** and track", "Worksheet *A*"),
        activities=(
            Activity(
                name="Warm up",
                duration=10,
                description="Recall *inertia* from the last lesson.",
            ),
            Activity(
                name="Investigation",
                duration=25,
                description="Measure acceleration.\n$$\n a = \\frac{F}{m} \n$$",
            ),
            Activity(
                name="Plenary",
                duration=5,
                description="Exit ticket costing $5 and $10 in fake money.",
            ),
        ),
        assessment="Solve **three** problems using $F=ma$.",
        homework="Read chapter 4.",
        summary="Force equals mass times acceleration.",
    )


@pytest.fixture
def bare_plan() -> LessonPlan:
    """A plan with no materials, activities, summary or homework."""
    return LessonPlan(
        title="Quiet Reading",
        objective="Read independently.",
        grade_level="",
        subject="English",
        assessment="Teacher observation.",
    )


@pytest.fixture
def sample_plan_dict() -> dict:
    """JSON shape produced by the lesson generation service."""
    return {
        "title": "Photosynthesis",
        "objective": "Describe how plants make **glucose**.",
        "gradeLevel": "Grade 10",
        "subject": "Biology",
        "materials": ["Leaves", "Iodine"],
        "activities": [
            {"name": "Starter", "duration": 5, "description": "Quiz."},
            {"name": "Practical", "duration": 30, "description": "Starch test."},
        ],
        "assessment": "Label a diagram.",
        "homework": "",
        "summary": "Light energy becomes chemical energy.",
    }


@pytest.fixture
def plan_json_file(tmp_path: Path, sample_plan_dict: dict) -> Path:
    """A JSON file holding one lesson plan."""
    file_path = tmp_path / "plan.json"
    file_path.write_text(json.dumps(sample_plan_dict), encoding="utf-8")
    return file_path


@pytest.fixture
def plans_json_file(tmp_path: Path, sample_plan_dict: dict) -> Path:
    """A JSON file holding two lesson plans."""
    second = dict(sample_plan_dict, title="Respiration")
    file_path = tmp_path / "plans.json"
    file_path.write_text(json.dumps([sample_plan_dict, second]), encoding="utf-8")
    return file_path
