"""Tests for the flow and page renderers."""

import random
from dataclasses import replace

import pytest

from lesson_export.config import HeaderPlaceholders
from lesson_export.core.models import Activity, LessonPlan
from lesson_export.formatting.ir import Span, SpanStyle
from lesson_export.rendering.base import (
    ASSESSMENT_HEADING,
    HOMEWORK_HEADING,
    PROCEDURE_HEADING,
    PRODUCT_TITLE,
    RESOURCES_HEADING,
    SUMMARY_HEADING,
    BlockRole,
    activity_title,
)
from lesson_export.rendering.flow import (
    BODY_FONT,
    BODY_SIZE,
    DISPLAY_MATH_SIZE,
    MATH_FONT,
    Alignment,
    FlowBulletList,
    FlowParagraph,
    FlowRenderer,
    FlowTable,
    SectionBreak,
    render_flow,
    render_flow_batch,
    span_to_run,
)
from lesson_export.rendering.page import (
    DISPLAY_MATH_FONT_SIZE,
    ListBlock,
    PageBreakBlock,
    PageRenderer,
    TableBlock,
    TextBlock,
    render_page,
    render_page_batch,
    span_to_fragment,
)

RENDERERS = [FlowRenderer, PageRenderer]


class TestSectionStructure:
    """Section order and content shared by both backends."""

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_section_order(self, renderer_class, sample_plan: LessonPlan):
        tree = renderer_class().render(sample_plan)

        assert tree.roles()[0] is BlockRole.HEADER
        assert tree.headings() == [
            SUMMARY_HEADING,
            RESOURCES_HEADING,
            PROCEDURE_HEADING,
            ASSESSMENT_HEADING,
            HOMEWORK_HEADING,
        ]

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_optional_sections_omitted(self, renderer_class, bare_plan: LessonPlan):
        tree = renderer_class().render(bare_plan)

        assert tree.headings() == [
            RESOURCES_HEADING,
            PROCEDURE_HEADING,
            ASSESSMENT_HEADING,
        ]

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_empty_materials_placeholder(self, renderer_class, bare_plan: LessonPlan):
        tree = renderer_class().render(bare_plan)
        resources = tree.section(RESOURCES_HEADING)

        assert len(resources) == 1
        assert resources[0].role is BlockRole.PLACEHOLDER
        assert resources[0].plain_text == "No materials required."

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_custom_placeholder_text(self, renderer_class, bare_plan: LessonPlan):
        placeholders = HeaderPlaceholders(empty_materials_text="Nothing needed")
        tree = renderer_class(placeholders).render(bare_plan)

        assert tree.section(RESOURCES_HEADING)[0].plain_text == "Nothing needed"

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_materials_list_keeps_duplicates(self, renderer_class, sample_plan: LessonPlan):
        plan = replace(sample_plan, materials=("Ruler", "Ruler", "**Pens**"))
        resources = renderer_class().render(plan).section(RESOURCES_HEADING)

        assert len(resources) == 1
        assert resources[0].role is BlockRole.BULLET_LIST
        assert resources[0].plain_text == "Ruler\nRuler\nPens"

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_zero_activities_gives_heading_only(self, renderer_class, bare_plan: LessonPlan):
        tree = renderer_class().render(bare_plan)

        assert tree.section(PROCEDURE_HEADING) == []
        assert tree.activity_titles() == []

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_activity_blocks(self, renderer_class, sample_plan: LessonPlan):
        procedure = renderer_class().render(sample_plan).section(PROCEDURE_HEADING)

        assert [b.role for b in procedure] == [
            BlockRole.ACTIVITY_TITLE,
            BlockRole.BODY,
        ] * 3
        assert procedure[0].plain_text == "WARM UP (10 mins)"
        assert procedure[1].plain_text == "Recall inertia from the last lesson."
        assert procedure[3].plain_text == "Measure acceleration.\na = \\frac{F}{m}"

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_activity_order_matches_input(self, renderer_class):
        rng = random.Random(42)
        activities = [Activity(f"Step {i}", i + 1, f"Do *thing* {i}") for i in range(8)]

        for _ in range(20):
            rng.shuffle(activities)
            plan = LessonPlan("T", "O", "Grade 7", "Maths", activities=tuple(activities))
            tree = renderer_class().render(plan)

            assert tree.activity_titles() == [activity_title(a) for a in activities]

    @pytest.mark.parametrize("renderer_class", RENDERERS)
    def test_header_has_nine_fields(self, renderer_class, sample_plan: LessonPlan):
        placeholders = HeaderPlaceholders(
            institution_name="Hill School",
            teacher_name="A. Teacher",
            period="3",
            date_placeholder="Monday",
        )
        header = renderer_class(placeholders).render(sample_plan).nodes[0]

        assert header.plain_text.split("\n") == [
            "Hill School",
            PRODUCT_TITLE,
            "GRADE: 9th",
            "SUBJECT: Physics",
            "PERIODS: 3",
            "DATE/TIMELINE: Monday",
            "LESSON TOPIC: Newton's Second Law",
            "LEARNING OBJECTIVE: Students will apply F=ma to everyday problems.",
            "TEACHER: A. Teacher",
        ]

    def test_backends_agree_on_outline(self, sample_plan: LessonPlan):
        """Both backends expose identical semantic sections and text."""
        flow = FlowRenderer().render(sample_plan)
        page = PageRenderer().render(sample_plan)

        assert flow.outline() == page.outline()

    def test_backends_agree_on_batch_outline(self, sample_plan, bare_plan):
        plans = [sample_plan, bare_plan, sample_plan]

        assert (
            render_flow_batch(plans).outline() == render_page_batch(plans).outline()
        )


class TestSpanMapping:
    """Span to run/fragment lowering."""

    def test_flow_runs(self):
        assert span_to_run(Span("a")).bold is False
        assert span_to_run(Span("a", SpanStyle.BOLD)).bold is True
        assert span_to_run(Span("a", SpanStyle.ITALIC)).italic is True

        inline = span_to_run(Span("x", SpanStyle.INLINE_MATH))
        assert inline.bold is True
        assert inline.font == MATH_FONT
        assert inline.size == BODY_SIZE

        display = span_to_run(Span("x", SpanStyle.DISPLAY_MATH))
        assert display.bold is True
        assert display.font == MATH_FONT
        assert display.size == DISPLAY_MATH_SIZE

    def test_flow_plain_run_uses_body_font(self):
        run = span_to_run(Span("a"))

        assert run.font == BODY_FONT
        assert not run.italic

    def test_page_fragments(self):
        plain = span_to_fragment(Span("a"))
        assert (plain.bold, plain.italic, plain.font_size) == (False, False, None)

        assert span_to_fragment(Span("a", SpanStyle.BOLD)).bold is True
        assert span_to_fragment(Span("a", SpanStyle.ITALIC)).italic is True

        inline = span_to_fragment(Span("x", SpanStyle.INLINE_MATH))
        assert (inline.bold, inline.italic, inline.font_size) == (True, True, None)

        display = span_to_fragment(Span("x", SpanStyle.DISPLAY_MATH))
        assert (display.bold, display.italic) == (True, True)
        assert display.font_size == DISPLAY_MATH_FONT_SIZE

    def test_every_style_distinguishable_in_both_backends(self):
        styles = list(SpanStyle)

        flow = {span_to_run(Span("x", s)) for s in styles}
        page = {span_to_fragment(Span("x", s)) for s in styles}

        assert len(flow) == len(styles)
        assert len(page) == len(styles)


class TestFlowRenderer:
    """Flow-specific structure."""

    def test_header_table_layout(self, sample_plan: LessonPlan):
        table = render_flow(sample_plan).nodes[0]

        assert isinstance(table, FlowTable)
        assert table.columns == 4
        assert [len(row.cells) for row in table.rows] == [1, 4, 1, 1, 1]
        assert table.rows[0].cells[0].column_span == 4

    def test_teacher_name_is_bold(self, sample_plan: LessonPlan):
        table = render_flow(sample_plan).nodes[0]
        runs = table.rows[-1].cells[0].paragraphs[0].runs

        assert runs[0].text == "TEACHER: "
        assert runs[0].bold is False
        assert runs[1].bold is True

    def test_description_paragraph_is_justified(self, sample_plan: LessonPlan):
        procedure = render_flow(sample_plan).section(PROCEDURE_HEADING)

        assert isinstance(procedure[1], FlowParagraph)
        assert procedure[1].alignment is Alignment.JUSTIFY

    def test_activity_title_is_bold(self, sample_plan: LessonPlan):
        title = render_flow(sample_plan).section(PROCEDURE_HEADING)[0]

        assert all(run.bold for run in title.runs)

    def test_bullet_items_carry_styles(self, sample_plan: LessonPlan):
        bullets = render_flow(sample_plan).section(RESOURCES_HEADING)[0]

        assert isinstance(bullets, FlowBulletList)
        trolley = bullets.items[1].runs
        assert trolley[0].text == "Trolley"
        assert trolley[0].bold is True

    def test_batch_has_single_break_between_two_plans(self, sample_plan, bare_plan):
        tree = render_flow_batch([sample_plan, bare_plan])
        single = render_flow(sample_plan)

        assert tree.break_positions() == [len(single)]
        assert isinstance(tree.nodes[len(single)], SectionBreak)
        assert tree.section_count == 2

    def test_batch_of_one_has_no_break(self, sample_plan):
        assert render_flow_batch([sample_plan]) == render_flow(sample_plan)

    def test_empty_batch(self):
        assert len(render_flow_batch([])) == 0

    def test_batch_fragments_match_single_renders(self, sample_plan, bare_plan):
        plans = [bare_plan, sample_plan, bare_plan]
        tree = render_flow_batch(plans)

        assert tree.fragments() == [list(render_flow(p).nodes) for p in plans]


class TestPageRenderer:
    """Page-specific structure."""

    def test_header_table_layout(self, sample_plan: LessonPlan):
        table = render_page(sample_plan).nodes[0]

        assert isinstance(table, TableBlock)
        assert table.layout == "lightHorizontalLines"
        assert [len(row) for row in table.rows] == [1, 4, 1, 1, 1]
        assert table.rows[2][0].col_span == 4

    def test_materials_are_unordered_list(self, sample_plan: LessonPlan):
        resources = render_page(sample_plan).section(RESOURCES_HEADING)

        assert isinstance(resources[0], ListBlock)
        assert len(resources[0].items) == 3

    def test_activity_title_block(self, sample_plan: LessonPlan):
        title = render_page(sample_plan).section(PROCEDURE_HEADING)[0]

        assert isinstance(title, TextBlock)
        assert title.style == "activity_title"
        assert title.fragments[0].bold is True

    def test_assessment_block_present(self, sample_plan: LessonPlan):
        assessment = render_page(sample_plan).section(ASSESSMENT_HEADING)

        assert len(assessment) == 1
        assert assessment[0].plain_text == "Solve three problems using F=ma."

    def test_batch_page_breaks(self, sample_plan, bare_plan):
        tree = render_page_batch([sample_plan, bare_plan, sample_plan])

        assert tree.page_breaks == 2
        assert not isinstance(tree.nodes[0], PageBreakBlock)
        for position in tree.break_positions():
            assert isinstance(tree.nodes[position], PageBreakBlock)
            assert tree.nodes[position + 1].role is BlockRole.HEADER

    def test_render_is_pure(self, sample_plan):
        renderer = PageRenderer()

        assert renderer.render(sample_plan) == renderer.render(sample_plan)


class TestHeaderSpanStyles:
    """Tokenized header values keep their span styling."""

    def test_flow_display_math_differs_from_inline(self, sample_plan: LessonPlan):
        plan = replace(sample_plan, objective="$$D$$ $i$")
        table = render_flow(plan).nodes[0]
        runs = {run.text: run for run in table.rows[3].cells[0].paragraphs[0].runs}

        assert runs["D"].font == runs["i"].font == MATH_FONT
        assert runs["D"].size > runs["i"].size

    def test_flow_objective_plain_and_bold_differ(self, sample_plan: LessonPlan):
        plan = replace(sample_plan, objective="plain **bold**")
        table = render_flow(plan).nodes[0]
        runs = {run.text: run for run in table.rows[3].cells[0].paragraphs[0].runs}

        assert runs["plain "].bold is False
        assert runs["bold"].bold is True

    def test_page_objective_plain_and_bold_differ(self, sample_plan: LessonPlan):
        plan = replace(sample_plan, objective="plain **bold**")
        table = render_page(plan).nodes[0]
        block = table.rows[3][0].blocks[0]

        assert [(f.text, f.bold) for f in block.fragments] == [
            ("LEARNING OBJECTIVE: ", True),
            ("plain ", False),
            ("bold", True),
        ]

    def test_page_detail_and_teacher_values_are_bold(self, sample_plan: LessonPlan):
        table = render_page(sample_plan).nodes[0]
        grade = table.rows[1][0].blocks[0]
        teacher = table.rows[4][0].blocks[0]

        assert all(f.bold for f in grade.fragments)
        assert all(f.bold for f in teacher.fragments)
