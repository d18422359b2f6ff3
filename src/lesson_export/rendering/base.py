"""Section renderer interface shared by the document backends.

A renderer lowers a LessonPlan into a backend-specific tree of blocks.
The order and content of the sections is fixed here, in
:meth:`SectionRenderer.render_fragment`; backends only decide how each
kind of block looks.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Iterable, Optional, Protocol, TypeVar

from lesson_export.config import HeaderPlaceholders
from lesson_export.core.models import Activity, LessonPlan
from lesson_export.formatting.ir import RichText, Span
from lesson_export.formatting.parser import MarkupTokenizer

PRODUCT_TITLE = "DAILY LESSON PLAN"

SUMMARY_HEADING = "SUMMARY"
RESOURCES_HEADING = "RESOURCES"
PROCEDURE_HEADING = "LESSON PROCEDURE & TIMINGS"
ASSESSMENT_HEADING = "ASSESSMENT"
HOMEWORK_HEADING = "HOMEWORK"


class BlockRole(Enum):
    """Semantic role of a top-level block, common to both backends."""

    HEADER = "header"
    HEADING = "heading"
    BODY = "body"
    BULLET_LIST = "bullet_list"
    PLACEHOLDER = "placeholder"
    ACTIVITY_TITLE = "activity_title"
    BREAK = "break"


class Block(Protocol):
    """What every top-level tree node exposes."""

    @property
    def role(self) -> BlockRole: ...

    @property
    def plain_text(self) -> str: ...


@dataclass(frozen=True)
class HeaderField:
    """One labelled value of the header table.

    Attributes:
        label: Field label such as "GRADE", or "" for title lines
        value: The field value as rich text
        emphasize_value: Render the value in bold
    """

    label: str
    value: RichText
    emphasize_value: bool = False

    @property
    def prefix(self) -> str:
        return f"{self.label}: " if self.label else ""

    @property
    def plain_text(self) -> str:
        return self.prefix + self.value.plain_text


@dataclass(frozen=True)
class HeaderFields:
    """The nine header fields, grouped the way both backends lay them out."""

    institution: HeaderField
    product_title: HeaderField
    grade: HeaderField
    subject: HeaderField
    period: HeaderField
    date: HeaderField
    topic: HeaderField
    objective: HeaderField
    teacher: HeaderField

    @property
    def title_lines(self) -> tuple[HeaderField, HeaderField]:
        return (self.institution, self.product_title)

    @property
    def detail_row(self) -> tuple[HeaderField, ...]:
        return (self.grade, self.subject, self.period, self.date)

    @property
    def full_width_rows(self) -> tuple[HeaderField, ...]:
        return (self.topic, self.objective, self.teacher)

    def __iter__(self):
        yield from self.title_lines
        yield from self.detail_row
        yield from self.full_width_rows


NodeT = TypeVar("NodeT", bound=Block)
TreeT = TypeVar("TreeT")


@dataclass(frozen=True)
class RenderedTree(Generic[NodeT]):
    """An immutable sequence of top-level blocks.

    Attributes:
        nodes: Blocks in document order
    """

    nodes: tuple[NodeT, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def roles(self) -> list[BlockRole]:
        return [node.role for node in self.nodes]

    def outline(self) -> list[tuple[BlockRole, str]]:
        """Role and plain text of every block, in order."""
        return [(node.role, node.plain_text) for node in self.nodes]

    def headings(self) -> list[str]:
        return [n.plain_text for n in self.nodes if n.role is BlockRole.HEADING]

    def activity_titles(self) -> list[str]:
        return [
            n.plain_text for n in self.nodes if n.role is BlockRole.ACTIVITY_TITLE
        ]

    def break_positions(self) -> list[int]:
        return [i for i, n in enumerate(self.nodes) if n.role is BlockRole.BREAK]

    def fragments(self) -> list[list[NodeT]]:
        """Split the tree at break markers into per-plan fragments."""
        parts: list[list[NodeT]] = [[]]
        for node in self.nodes:
            if node.role is BlockRole.BREAK:
                parts.append([])
            else:
                parts[-1].append(node)
        return parts

    def section(self, heading: str, occurrence: int = 0) -> list[NodeT]:
        """Blocks following a heading, up to the next heading or break.

        Args:
            heading: Heading text to look for
            occurrence: Which matching heading to use (0 = first)

        Returns:
            The section's blocks, or an empty list if the heading is absent
        """
        seen = 0
        for i, node in enumerate(self.nodes):
            if node.role is BlockRole.HEADING and node.plain_text == heading:
                if seen == occurrence:
                    body: list[NodeT] = []
                    for following in self.nodes[i + 1 :]:
                        if following.role in (BlockRole.HEADING, BlockRole.BREAK):
                            break
                        body.append(following)
                    return body
                seen += 1
        return []


def activity_title(activity: Activity) -> str:
    """Title line of an activity, e.g. ``WARM UP (10 mins)``."""
    return f"{activity.name.upper()} ({activity.duration} mins)"


class SectionRenderer(ABC, Generic[NodeT, TreeT]):
    """Lower lesson plans into a backend-specific block tree.

    Subclasses provide the block factories; this class owns the section
    order, the header field set and batch concatenation, so both
    backends always emit the same logical structure.
    """

    def __init__(
        self,
        placeholders: Optional[HeaderPlaceholders] = None,
        tokenizer: Optional[MarkupTokenizer] = None,
    ) -> None:
        self.placeholders = placeholders or HeaderPlaceholders()
        self.tokenizer = tokenizer or MarkupTokenizer()

    def render(self, plan: LessonPlan) -> TreeT:
        """Render a single lesson plan."""
        return self._make_tree(self.render_fragment(plan))

    def render_batch(self, plans: Iterable[LessonPlan]) -> TreeT:
        """Render several plans into one tree.

        A break block is inserted before every plan except the first.
        """
        nodes: list[NodeT] = []
        for index, plan in enumerate(plans):
            if index > 0:
                nodes.append(self._break())
            nodes.extend(self.render_fragment(plan))
        return self._make_tree(nodes)

    def render_fragment(self, plan: LessonPlan) -> list[NodeT]:
        """Render the blocks of one plan, without any break marker."""
        nodes: list[NodeT] = [self._header(self.header_fields(plan))]

        if plan.summary.strip():
            nodes.append(self._heading(SUMMARY_HEADING))
            nodes.append(self._paragraph(self._rich(plan.summary)))

        nodes.append(self._heading(RESOURCES_HEADING))
        if plan.materials:
            nodes.append(self._bullet_list([self._rich(m) for m in plan.materials]))
        else:
            nodes.append(self._placeholder(self.placeholders.empty_materials_text))

        nodes.append(self._heading(PROCEDURE_HEADING))
        for activity in plan.activities:
            nodes.append(self._activity_title(activity_title(activity)))
            nodes.append(self._paragraph(self._rich(activity.description)))

        nodes.append(self._heading(ASSESSMENT_HEADING))
        nodes.append(self._paragraph(self._rich(plan.assessment)))

        if plan.homework.strip():
            nodes.append(self._heading(HOMEWORK_HEADING))
            nodes.append(self._paragraph(self._rich(plan.homework)))

        return nodes

    def header_fields(self, plan: LessonPlan) -> HeaderFields:
        """Collect the nine header fields for a plan."""
        p = self.placeholders
        return HeaderFields(
            institution=HeaderField("", _literal(p.institution_name)),
            product_title=HeaderField("", _literal(PRODUCT_TITLE)),
            grade=HeaderField("GRADE", _literal(plan.grade_short)),
            subject=HeaderField("SUBJECT", _literal(plan.subject)),
            period=HeaderField("PERIODS", _literal(p.period)),
            date=HeaderField("DATE/TIMELINE", _literal(p.date_placeholder)),
            topic=HeaderField("LESSON TOPIC", self._rich(plan.title)),
            objective=HeaderField("LEARNING OBJECTIVE", self._rich(plan.objective)),
            teacher=HeaderField(
                "TEACHER", _literal(p.teacher_name), emphasize_value=True
            ),
        )

    def _rich(self, text: str) -> RichText:
        return self.tokenizer.parse(text)

    @abstractmethod
    def _make_tree(self, nodes: list[NodeT]) -> TreeT:
        ...

    @abstractmethod
    def _header(self, fields: HeaderFields) -> NodeT:
        """Build the header table block."""
        ...

    @abstractmethod
    def _heading(self, text: str) -> NodeT:
        ...

    @abstractmethod
    def _paragraph(self, text: RichText) -> NodeT:
        """Build a body paragraph from rich text."""
        ...

    @abstractmethod
    def _bullet_list(self, items: list[RichText]) -> NodeT:
        ...

    @abstractmethod
    def _placeholder(self, text: str) -> NodeT:
        """Build the single line shown in place of an empty list."""
        ...

    @abstractmethod
    def _activity_title(self, text: str) -> NodeT:
        ...

    @abstractmethod
    def _break(self) -> NodeT:
        """Build the block separating two plans in a batch."""
        ...


def _literal(text: str) -> RichText:
    """Wrap text that must not be tokenized."""
    return RichText((Span(text),)) if text else RichText()
