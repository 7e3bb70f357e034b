"""CLI interface using typer + rich."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from jd_readiness.builder import JobDescriptionTooShortError
from jd_readiness.config import AppConfig, load_config
from jd_readiness.content.fallback import complete_content
from jd_readiness.models.record import AnalysisRecord
from jd_readiness.schema.registry import CONFIDENCE_LEVELS, SKILL_CATEGORIES
from jd_readiness.storage.history_store import HistoryStore
from jd_readiness.utils.documents import dump_history_text, parse_history_text
from jd_readiness.validation.migrator import migrate_old_entry
from jd_readiness.validation.validator import validate

app = typer.Typer(
    name="jd-readiness",
    help="Store, validate and migrate job-readiness analysis records",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    db: Path = typer.Option(None, "--db", help="History database path (overrides config.yaml)"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = load_config(config_path)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)
    ctx.obj = {"config": config, "db": db}


def _config(ctx: typer.Context) -> AppConfig:
    return ctx.obj["config"]


def _store(ctx: typer.Context) -> HistoryStore:
    config = _config(ctx)
    db_path = ctx.obj["db"] or config.storage.resolved_db_path
    return HistoryStore(db_path, jd_min_length=config.validation.jd_min_length)


def _read_json_file(path: Path) -> dict:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]{path} is not valid JSON: {e}[/red]")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        console.print(f"[red]{path} must contain a JSON object[/red]")
        raise typer.Exit(1)
    return data


def _format_time(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


def _score_line(record: AnalysisRecord) -> str:
    line = f"Final score: [bold]{record.final_score}[/bold]"
    if record.final_score != record.base_score:
        line += f" (base {record.base_score})"
    return line


@app.command()
def add(
    ctx: typer.Context,
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    content: Path = typer.Option(None, "--content", help="Analysis content JSON produced by the generator"),
    company: str = typer.Option("", "--company", "-c", help="Company name"),
    role: str = typer.Option("", "--role", "-r", help="Role title"),
    intel: Path = typer.Option(None, "--intel", help="Company intel JSON file"),
) -> None:
    """Save a new analysis to history."""
    if not jd.exists():
        console.print(f"[red]Job description file not found: {jd}[/red]")
        raise typer.Exit(1)

    jd_text = jd.read_text(encoding="utf-8")
    analysis = _read_json_file(content) if content else None
    if analysis is None:
        console.print("[dim]No analysis content given; using the general fallback content.[/dim]")
    analysis = complete_content(analysis)
    company_intel = _read_json_file(intel) if intel else None

    store = _store(ctx)
    try:
        record = store.save_analysis(analysis, company, role, jd_text, company_intel)
    except JobDescriptionTooShortError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if record is None:
        console.print("[red]Analysis failed validation and was not saved (run with -v for details).[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Saved analysis {record.id}[/green]")
    console.print(_score_line(record))


@app.command()
def history(
    ctx: typer.Context,
    limit: int = typer.Option(None, "--limit", "-n", help="Maximum number of entries to show"),
) -> None:
    """List saved analyses, newest first."""
    result = _store(ctx).load_history()
    if result.has_data_loss:
        console.print(Panel(
            f"{result.dropped_count} of {result.raw_count} saved entries couldn't be loaded "
            "and were skipped.",
            title="Some entries unavailable",
            border_style="yellow",
        ))

    if not result.records:
        console.print("[yellow]No saved analyses.[/yellow]")
        return

    shown = result.records[: limit or _config(ctx).cli.history_limit]
    table = Table(title=f"History ({result.valid_count} entries)")
    table.add_column("ID", style="dim")
    table.add_column("Created")
    table.add_column("Company")
    table.add_column("Role")
    table.add_column("Skills", justify="right")
    table.add_column("Score", justify="right")
    for record in shown:
        table.add_row(
            record.id[:8],
            _format_time(record.created_at),
            record.company or "-",
            record.role or "-",
            str(record.skill_count()),
            str(record.final_score),
        )
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    record_id: str = typer.Argument(help="Analysis id"),
) -> None:
    """Show one analysis in detail."""
    record = _store(ctx).get(record_id)
    if record is None:
        console.print(f"[red]No loadable analysis with id {record_id}[/red]")
        raise typer.Exit(1)

    skills = "\n".join(
        f"  {category}: {', '.join(record.extracted_skills[category]) or '-'}"
        for category in SKILL_CATEGORIES
    )
    marks = ", ".join(
        f"{skill}={level}" for skill, level in record.skill_confidence_map.items()
    ) or "-"
    console.print(Panel(
        f"[bold]{record.company or 'Unknown company'}[/bold] {record.role}\n"
        f"Created {_format_time(record.created_at)}, updated {_format_time(record.updated_at)}\n"
        f"{_score_line(record)}\n\n"
        f"Skills:\n{skills}\n\n"
        f"Confidence: {marks}",
        title=record.id,
    ))

    for item in record.checklist:
        if isinstance(item, str):
            console.print(f"- {item}")
            continue
        console.print(f"[bold]{item.get('round', '')}[/bold]")
        for line in item.get("items", []):
            console.print(f"  - {line}")
    for day in record.plan_7_days:
        if isinstance(day, str):
            console.print(f"[cyan]*[/cyan] {day}")
        else:
            console.print(f"[cyan]{day.get('day', '')}[/cyan] {day.get('focus', '')}")
    for i, question in enumerate(record.questions, 1):
        console.print(f"{i}. {question}")


@app.command()
def mark(
    ctx: typer.Context,
    record_id: str = typer.Argument(help="Analysis id"),
    skill: str = typer.Argument(help="Skill name"),
    level: str = typer.Argument(help="know, practice or unset"),
) -> None:
    """Set a skill confidence mark and recompute the final score."""
    if level not in CONFIDENCE_LEVELS:
        console.print(f"[red]Level must be one of: {', '.join(CONFIDENCE_LEVELS)}[/red]")
        raise typer.Exit(1)

    record = _store(ctx).update_confidence(record_id, skill, level)
    if record is None:
        console.print(f"[red]No loadable analysis with id {record_id}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{skill}: {level}[/green]")
    console.print(_score_line(record))


@app.command()
def delete(
    ctx: typer.Context,
    record_id: str = typer.Argument(help="Analysis id"),
) -> None:
    """Delete one analysis."""
    if not _store(ctx).delete(record_id):
        console.print(f"[red]No analysis with id {record_id}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Deleted {record_id}[/green]")


@app.command("import")
def import_history(
    ctx: typer.Context,
    file: Path = typer.Argument(help="History dump (JSON array, object or JSON Lines)"),
) -> None:
    """Import raw history entries; older shapes are migrated when loaded."""
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    try:
        entries = parse_history_text(file.read_text(encoding="utf-8"))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    store = _store(ctx)
    count = store.import_documents(entries)
    result = store.load_history()
    console.print(f"[green]Imported {count} entries.[/green]")
    console.print(f"History now holds {result.valid_count} loadable of {result.raw_count} stored entries.")


@app.command()
def export(
    ctx: typer.Context,
    output: Path = typer.Argument(help="Output JSON file"),
) -> None:
    """Export every loadable analysis in the current shape."""
    documents = _store(ctx).export_documents()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_history_text(documents), encoding="utf-8")
    console.print(f"[green]Exported {len(documents)} analyses to {output}[/green]")


@app.command("validate")
def validate_file(
    ctx: typer.Context,
    file: Path = typer.Argument(help="Record or history dump to check"),
) -> None:
    """Check entries against the schema without saving anything."""
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    try:
        entries = parse_history_text(file.read_text(encoding="utf-8"))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{file.name}: {len(entries)} entries")
    table.add_column("#", justify="right")
    table.add_column("As stored")
    table.add_column("After migration")
    table.add_column("Errors")
    jd_min_length = _config(ctx).validation.jd_min_length
    recoverable = 0
    for index, entry in enumerate(entries, 1):
        result = validate(entry, jd_min_length=jd_min_length)
        migrated = migrate_old_entry(entry, jd_min_length=jd_min_length)
        if migrated is not None:
            recoverable += 1
        table.add_row(
            str(index),
            "[green]valid[/green]" if result.is_valid else "[yellow]invalid[/yellow]",
            "[green]ok[/green]" if migrated is not None else "[red]dropped[/red]",
            "\n".join(result.errors[:5]),
        )
    console.print(table)
    console.print(f"{recoverable} of {len(entries)} entries would load.")
    if recoverable < len(entries):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
