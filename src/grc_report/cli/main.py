"""CLI for grc-report: compose / levels / scores / template commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from grc_report.assessment_data import load_items_file, load_rows_file
from grc_report.composer import ReportComposer
from grc_report.composer.template import has_placeholder
from grc_report.core.config import AppSettings, ObservabilityConfig, PDFLayoutConfig
from grc_report.core.startup_checks import validate_settings
from grc_report.exceptions import AssessmentDataError, GRCReportError
from grc_report.hooks import setup_logging
from grc_report.reference import MATURITY_LEVELS, maturity_scores
from grc_report.templates import TemplateStore, create_template_store

app = typer.Typer(name="grc-report", help="Maturity assessment report generation")
template_app = typer.Typer(help="Manage per-organization report templates")
app.add_typer(template_app, name="template")
console = Console()


def _configure_logging(verbose: bool) -> None:
    setup_logging(ObservabilityConfig(log_level="DEBUG" if verbose else "WARNING"))


def _template_store(store_path: Optional[Path]) -> TemplateStore:
    config = AppSettings().templates
    if store_path is not None:
        config = config.model_copy(update={"backend": "file", "store_path": store_path})
    return create_template_store(config)


@app.command()
def compose(
    rows_file: Path = typer.Argument(..., help="JSON file with assessment rows or items"),
    template_file: Optional[Path] = typer.Option(None, "--template", "-t", help="Template HTML file"),
    organization_id: Optional[str] = typer.Option(None, "--org", help="Use this organization's stored template"),
    output: Path = typer.Option(Path("."), "--output", "-o", help="Output file or directory"),
    page_size: Optional[str] = typer.Option(None, "--page-size", help="a4 or letter"),
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="Template store directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Compose the maturity assessment report PDF."""
    _configure_logging(verbose)

    overrides: dict = {}
    if page_size:
        overrides["page_size"] = page_size

    try:
        pdf_config = PDFLayoutConfig(**overrides)
        validate_settings(AppSettings(pdf=pdf_config))
        rows = load_rows_file(rows_file)
        if template_file is not None:
            template = template_file.read_text(encoding="utf-8")
        else:
            template = _template_store(store_path).get(organization_id)
        path = ReportComposer(pdf_config).compose_to_file(
            template, rows, output, organization_id=organization_id or ""
        )
    except (GRCReportError, ValueError, OSError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if not has_placeholder(template):
        console.print("[yellow]Template has no {{GAP_ASSESSMENT_TABLE}} placeholder; table appended at the end[/yellow]")
    console.print(f"Loaded {len(rows)} assessment row(s)")
    console.print(f"[green]Report saved to {path}[/green]")


@app.command()
def levels() -> None:
    """List the maturity scale."""
    table = Table(title="Maturity Levels")
    table.add_column("Value", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Score", justify="right")
    table.add_column("Description", max_width=60)
    for level in MATURITY_LEVELS:
        table.add_row(level.value, level.label, str(level.score), level.description)
    console.print(table)


@app.command()
def scores(
    items_file: Path = typer.Argument(..., help="JSON file with assessment items (level values, not labels)"),
) -> None:
    """Average current and target maturity across an assessment."""
    try:
        items = load_items_file(items_file)
    except AssessmentDataError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    result = maturity_scores(items)
    gapped = sum(1 for i in items if i.current_maturity_level != i.target_maturity_level)
    console.print(f"{len(items)} item(s), {gapped} with a gap")
    table = Table(title="Maturity Scores")
    table.add_column("Current", justify="right", style="cyan")
    table.add_column("Target", justify="right", style="green")
    table.add_column("Gap", justify="right", style="yellow")
    table.add_row(f"{result.current:.2f}", f"{result.target:.2f}", f"{result.gap:.2f}")
    console.print(table)


@template_app.command("list")
def template_list(
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="Template store directory"),
) -> None:
    """List organizations that have a stored template."""
    organizations = _template_store(store_path).organizations()
    if not organizations:
        console.print("[dim]No stored templates; every organization uses the default[/dim]")
        return
    for organization_id in organizations:
        console.print(organization_id, markup=False, highlight=False)


@template_app.command("show")
def template_show(
    organization_id: str = typer.Argument(..., help="Organization id"),
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="Template store directory"),
) -> None:
    """Print an organization's effective template."""
    store = _template_store(store_path)
    if not store.is_custom(organization_id):
        console.print(f"[dim]No stored template for {organization_id}; showing the default[/dim]")
    console.print(store.get(organization_id), markup=False, highlight=False)


@template_app.command("save")
def template_save(
    organization_id: str = typer.Argument(..., help="Organization id"),
    template_file: Path = typer.Argument(..., help="Template HTML file"),
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="Template store directory"),
) -> None:
    """Store a template for an organization."""
    try:
        content = template_file.read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    stored = _template_store(store_path).save(organization_id, content)
    if not has_placeholder(stored):
        console.print("[yellow]Template has no {{GAP_ASSESSMENT_TABLE}} placeholder; the table will follow it[/yellow]")
    console.print(f"[green]Saved template for {organization_id}[/green]")


@template_app.command("delete")
def template_delete(
    organization_id: str = typer.Argument(..., help="Organization id"),
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="Template store directory"),
) -> None:
    """Remove an organization's stored template."""
    store = _template_store(store_path)
    if not store.is_custom(organization_id):
        console.print(f"[red]No stored template for {organization_id}[/red]")
        raise typer.Exit(code=1)
    store.delete(organization_id)
    console.print(f"[green]Deleted template for {organization_id}[/green]")


if __name__ == "__main__":
    app()
