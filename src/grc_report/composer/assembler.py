"""Document assembler: template + assessment rows -> paginated PDF.

Runs the fixed stage sequence ``render_before -> render_table ->
render_after -> finalize`` on a fresh ``OutputDocument``. The cursor is
returned by each renderer and handed to the next one; nothing else is shared
between stages. A failing stage aborts the composition and the partial
document is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from grc_report.composer.document import OutputDocument
from grc_report.composer.html_renderer import HTMLBlockRenderer
from grc_report.composer.measure import IBlockMeasurer
from grc_report.composer.rows import coerce_rows, select_table_rows
from grc_report.composer.table_renderer import GapTableRenderer
from grc_report.composer.template import split_template
from grc_report.core.config import PDFLayoutConfig
from grc_report.hooks.run_tracker import end_run, get_current_run, start_run, track_stage
from grc_report.models import AssessmentRow, ComposedReport, RenderCursor

log = logging.getLogger(__name__)


class ReportComposer:
    """Composes maturity assessment reports. One call to ``compose`` per report.

    Args:
        config: Page geometry and typography. Defaults to ``PDFLayoutConfig()``.
        measurer: Optional height measurer for template blocks. When omitted
            the renderer measures with the same reportlab layout it draws with.
    """

    def __init__(
        self,
        config: PDFLayoutConfig | None = None,
        measurer: IBlockMeasurer | None = None,
    ) -> None:
        self._config = config or PDFLayoutConfig()
        self._measurer = measurer

    @property
    def config(self) -> PDFLayoutConfig:
        return self._config

    def compose(
        self,
        template: str,
        rows: Sequence[AssessmentRow | Sequence[Any]],
        organization_id: str = "",
    ) -> ComposedReport:
        """Build the report and return the finished PDF.

        Starts a run for the composition unless the caller already has one
        active, in which case the stages are recorded on the caller's run.
        """
        owns_run = get_current_run() is None
        if owns_run:
            start_run(organization_id=organization_id)

        try:
            report = self._compose(template or "", coerce_rows(rows))
        except Exception:
            if owns_run:
                run = end_run("failed")
                log.error(f"Report composition failed after stages {run.stage_names() if run else []}")
            raise

        if owns_run:
            run = end_run("completed")
            if run is not None:
                log.info(
                    f"Composed report: {report.page_count} page(s), "
                    f"{len(report.table_rows)} table row(s) in {run.total_duration_ms:.0f}ms"
                )
        return report

    def compose_to_file(
        self,
        template: str,
        rows: Sequence[AssessmentRow | Sequence[Any]],
        path: Path,
        organization_id: str = "",
    ) -> Path:
        """Compose and write the PDF. A directory *path* gets the configured file name."""
        path = Path(path)
        if path.is_dir():
            path = path / self._config.output_filename
        report = self.compose(template, rows, organization_id=organization_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(report.pdf)
        log.info(f"Wrote {path} ({len(report.pdf)} bytes)")
        return path

    # ── Stages ───────────────────────────────────────────────────────

    def _compose(self, template: str, rows: list[AssessmentRow]) -> ComposedReport:
        segments = split_template(template)
        if template.strip() and not segments.has_placeholder:
            log.info("Template has no table placeholder; appending the table after the template")

        document = OutputDocument(self._config)
        html = HTMLBlockRenderer(document, self._config, measurer=self._measurer)
        table = GapTableRenderer(document, self._config)
        cursor = RenderCursor(y=document.top_margin, page=1)

        with track_stage("render_before") as stage:
            if not segments.before.strip():
                stage.status = "skipped"
            cursor = html.render(segments.before, cursor)

        with track_stage("render_table") as stage:
            table_rows, used_fallback = select_table_rows(rows)
            if used_fallback:
                log.info(f"No gapped rows; rendering all {len(table_rows)} assessment row(s)")
            if not table_rows:
                stage.status = "skipped"
            cursor = table.render(table_rows, cursor)

        with track_stage("render_after") as stage:
            if not segments.after.strip():
                stage.status = "skipped"
            cursor = html.render(segments.after, cursor)

        with track_stage("finalize"):
            pdf = document.finalize()

        log.debug(f"Final cursor y={cursor.y:.1f} on page {cursor.page}")
        return ComposedReport(
            pdf=pdf,
            filename=self._config.output_filename,
            page_count=document.page_count,
            blocks=list(document.blocks),
            table_rows=table_rows,
            has_placeholder=segments.has_placeholder,
            used_fallback_rows=used_fallback,
        )


def compose_report(
    template: str,
    rows: Sequence[AssessmentRow | Sequence[Any]],
    config: PDFLayoutConfig | None = None,
) -> ComposedReport:
    """Convenience wrapper around ``ReportComposer(config).compose``."""
    return ReportComposer(config).compose(template, rows)
