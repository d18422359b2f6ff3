"""Export orchestration: naming, rendering and delivery of lesson plans."""

import logging
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence

from lesson_export.config import HeaderPlaceholders
from lesson_export.core.filenames import sanitize_filename, unique_filenames
from lesson_export.core.models import LessonPlan
from lesson_export.formats import ExportTarget, FormatHandler, get_handler
from lesson_export.rendering.base import SectionRenderer
from lesson_export.rendering.flow import FlowRenderer
from lesson_export.rendering.page import PageRenderer

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Error while exporting a lesson plan."""

    pass


class EncodingFailure(ExportError):
    """The encoder or the file write failed for one output document.

    Attributes:
        filename: Name of the document that could not be produced
    """

    def __init__(self, filename: str, message: str) -> None:
        super().__init__(f"Could not encode {filename}: {message}")
        self.filename = filename


@dataclass(frozen=True)
class ExportResult:
    """A rendered tree together with its output name.

    Attributes:
        tree: The rendered FlowTree or PageTree
        filename: Sanitized filename base, without extension
        target: Which backend produced the tree
    """

    tree: Any
    filename: str
    target: ExportTarget

    @property
    def file_name(self) -> str:
        """Filename including the target's extension."""
        return f"{self.filename}{self.target.extension}"


@dataclass(frozen=True)
class ItemOutcome:
    """Delivery result of one output document."""

    filename: str
    target: ExportTarget
    path: Optional[Path] = None
    error: Optional[ExportError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class ExportReport:
    """Per-item results of a multi-document export."""

    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def ok(self) -> bool:
        return not self.failed

    def add(self, outcome: ItemOutcome) -> None:
        self.outcomes.append(outcome)


class Exporter:
    """Orchestrates the export pipeline.

    Pipeline:
    1. Compute a sanitized filename
    2. Render the plan(s) with the flow or page backend
    3. Optionally encode the tree and write it to disk

    Rendering is pure; only :meth:`save` and the methods built on it
    touch the file system.
    """

    def __init__(
        self,
        placeholders: Optional[HeaderPlaceholders] = None,
        handlers: Optional[dict[ExportTarget, FormatHandler]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the exporter.

        Args:
            placeholders: Header placeholder values for both renderers
            handlers: Encoder instances per target (default: DOCX and PDF)
            sleep: Pause function used between deliveries
        """
        self.placeholders = placeholders or HeaderPlaceholders()
        self.handlers = handlers or {
            target: get_handler(target)() for target in ExportTarget
        }
        self.sleep = sleep
        self._renderers: dict[ExportTarget, SectionRenderer] = {
            ExportTarget.FLOW: FlowRenderer(self.placeholders),
            ExportTarget.PAGE: PageRenderer(self.placeholders),
        }

    def renderer_for(self, target: ExportTarget | str) -> SectionRenderer:
        return self._renderers[ExportTarget(target)]

    def export(
        self,
        plan: LessonPlan,
        target: ExportTarget | str,
        slo_id: Optional[str] = None,
    ) -> ExportResult:
        """Render one lesson plan.

        Args:
            plan: The lesson plan
            target: Backend to render with
            slo_id: Optional curriculum identifier used in the filename

        Returns:
            The rendered tree and its filename base
        """
        target = ExportTarget(target)
        filename = sanitize_filename(plan.title, slo_id)
        logger.debug("Rendering %s as %s", filename, target.value)
        tree = self.renderer_for(target).render(plan)
        return ExportResult(tree=tree, filename=filename, target=target)

    def export_batch(
        self,
        plans: Sequence[LessonPlan],
        target: ExportTarget | str,
        base_name: str,
    ) -> ExportResult:
        """Render several lesson plans into one document.

        Args:
            plans: Lesson plans in output order
            target: Backend to render with
            base_name: Name of the combined document

        Returns:
            The combined tree and its filename base
        """
        target = ExportTarget(target)
        filename = sanitize_filename(base_name)
        logger.debug(
            "Rendering %d plan(s) into %s as %s", len(plans), filename, target.value
        )
        tree = self.renderer_for(target).render_batch(plans)
        return ExportResult(tree=tree, filename=filename, target=target)

    def save(self, result: ExportResult, output_dir: Path) -> Path:
        """Encode an export result and write it into a directory.

        The file is only created once encoding has succeeded.

        Returns:
            Path of the written file

        Raises:
            EncodingFailure: If encoding or writing fails
        """
        handler = self.handlers[result.target]
        path = output_dir / result.file_name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            handler.write(result.tree, path)
        except Exception as e:
            raise EncodingFailure(result.file_name, str(e)) from e
        logger.info("Saved %s", path)
        return path

    def save_many(
        self,
        plans: Sequence[LessonPlan],
        targets: Iterable[ExportTarget | str],
        output_dir: Path,
        slo_ids: Optional[Sequence[Optional[str]]] = None,
        delay: float = 0.0,
    ) -> ExportReport:
        """Export and save each plan as its own document(s).

        Each output document succeeds or fails on its own; a failure is
        recorded in the report and the remaining items still run.

        Args:
            plans: Lesson plans in output order
            targets: Backends to export every plan with
            output_dir: Directory to write into
            slo_ids: Optional identifier per plan, aligned with plans
            delay: Seconds to pause between consecutive saves

        Returns:
            Per-document outcomes in processing order
        """
        targets = [ExportTarget(t) for t in targets]
        if slo_ids is not None and len(slo_ids) != len(plans):
            raise ValueError("slo_ids must have one entry per plan")
        ids = list(slo_ids) if slo_ids is not None else [None] * len(plans)

        names = unique_filenames(
            sanitize_filename(plan.title, slo_id) for plan, slo_id in zip(plans, ids)
        )

        report = ExportReport()
        for plan, slo_id, name in zip(plans, ids, names):
            for target in targets:
                if report.outcomes and delay > 0:
                    self.sleep(delay)
                result = replace(self.export(plan, target, slo_id), filename=name)
                report.add(self._deliver(result, output_dir))

        return report

    def save_batch(
        self,
        plans: Sequence[LessonPlan],
        targets: Iterable[ExportTarget | str],
        output_dir: Path,
        base_name: str,
        delay: float = 0.0,
    ) -> ExportReport:
        """Export all plans into one combined document per target."""
        report = ExportReport()
        for target in targets:
            if report.outcomes and delay > 0:
                self.sleep(delay)
            result = self.export_batch(plans, target, base_name)
            report.add(self._deliver(result, output_dir))
        return report

    def _deliver(self, result: ExportResult, output_dir: Path) -> ItemOutcome:
        try:
            path = self.save(result, output_dir)
        except EncodingFailure as e:
            logger.error("%s", e)
            return ItemOutcome(result.filename, result.target, error=e)
        return ItemOutcome(result.filename, result.target, path=path)


def export(
    plan: LessonPlan,
    target: ExportTarget | str,
    slo_id: Optional[str] = None,
    placeholders: Optional[HeaderPlaceholders] = None,
) -> ExportResult:
    """Render one plan with a default exporter. No I/O is performed."""
    return Exporter(placeholders).export(plan, target, slo_id)


def export_batch(
    plans: Sequence[LessonPlan],
    target: ExportTarget | str,
    base_name: str,
    placeholders: Optional[HeaderPlaceholders] = None,
) -> ExportResult:
    """Render several plans into one tree with a default exporter."""
    return Exporter(placeholders).export_batch(plans, target, base_name)
