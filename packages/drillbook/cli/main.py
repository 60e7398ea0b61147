"""Command-line interface for Drillbook.

Inspects exported chart files: summary, transition feasibility, and
interpolated positions at a beat.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from drillbook.core.config.loader import configure_logging, load_app_config
from drillbook.core.config.models import AppConfig
from drillbook.core.drill.field import describe_field_position
from drillbook.core.drill.models import Chart
from drillbook.core.drill.store import FormationStore
from drillbook.core.errors import DrillbookError
from drillbook.core.validation.transition import (
    TransitionSeverity,
    severity_label,
    validate_chart,
)

console = Console()
logger = logging.getLogger(__name__)

_SEVERITY_STYLES = {
    TransitionSeverity.NORMAL: "green",
    TransitionSeverity.FAST: "yellow",
    TransitionSeverity.HARD: "dark_orange",
    TransitionSeverity.IMPOSSIBLE: "bold red",
}


def load_chart_file(path: Path) -> Chart | None:
    """Read an exported chart, printing an error and returning None on failure."""
    if not path.exists():
        console.print(f"[red]ERROR: Chart file not found: {path}[/red]")
        return None
    try:
        return FormationStore.import_chart_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        console.print(f"[red]ERROR: {path} is not a valid chart: {e.error_count()} error(s)[/red]")
        logger.debug("Chart validation failed: %s", e)
        return None


def cmd_info(args: argparse.Namespace, config: AppConfig) -> int:
    """Print a chart summary and its formation list."""
    chart = load_chart_file(Path(args.chart))
    if chart is None:
        return 1

    console.print(f"[bold]{chart.name or '(untitled)'}[/bold]  [dim]{chart.id}[/dim]")
    console.print(f"Song: {chart.song_id or '-'}")
    console.print(f"Formations: {chart.formation_count}")
    console.print(f"Last modified: {chart.last_modified_date}")

    table = Table(title="Formations")
    table.add_column("#", justify="right")
    table.add_column("Label")
    table.add_column("Start", justify="right")
    table.add_column("Hold", justify="right")
    table.add_column("Members", justify="right")
    table.add_column("Transition in")
    for i, f in enumerate(chart.formations):
        table.add_row(
            str(i),
            f.label,
            f"{f.start_beat:.1f}",
            f"{f.duration_beats:.1f}",
            str(len(f.positions)),
            f.transition_in.value,
        )
    console.print(table)
    return 0


def cmd_validate(args: argparse.Namespace, config: AppConfig) -> int:
    """Check every transition; exit code 1 if any is impossible."""
    chart = load_chart_file(Path(args.chart))
    if chart is None:
        return 1

    bpm = args.bpm if args.bpm is not None else config.default_bpm
    results = validate_chart(chart, bpm)
    if not results:
        console.print("[yellow]Nothing to validate: chart has fewer than two formations[/yellow]")
        return 0

    table = Table(title=f"Transitions at {bpm:g} BPM")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Gap (beats)", justify="right")
    table.add_column("Gap (s)", justify="right")
    table.add_column("Max yd/s", justify="right")
    table.add_column("Fastest")
    table.add_column("Severity")

    formations = chart.formations
    for a, b, result in zip(formations, formations[1:], results):
        style = _SEVERITY_STYLES[result.severity]
        table.add_row(
            a.label,
            b.label,
            f"{result.gap_beats:.1f}",
            f"{result.gap_seconds:.2f}",
            "inf" if result.max_speed == float("inf") else f"{result.max_speed:.2f}",
            result.fastest_member_id or "-",
            f"[{style}]{severity_label(result.severity)}[/{style}]",
        )
    console.print(table)

    impossible = sum(1 for r in results if r.severity is TransitionSeverity.IMPOSSIBLE)
    if impossible:
        console.print(f"[red]❌ {impossible} impossible transition(s)[/red]")
        return 1
    console.print("[green]✅ All transitions are marchable[/green]")
    return 0


def cmd_preview(args: argparse.Namespace, config: AppConfig) -> int:
    """Print interpolated member positions at a beat."""
    chart = load_chart_file(Path(args.chart))
    if chart is None:
        return 1

    store = FormationStore()
    store.load_chart(chart)
    positions = store.get_interpolated_positions(args.beat)

    if not positions:
        console.print(f"[yellow]No members on the field at beat {args.beat:g}[/yellow]")
        return 0

    table = Table(title=f"Positions at beat {args.beat:g}")
    table.add_column("Member")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Facing", justify="right")
    table.add_column("Where")
    for p in positions:
        table.add_row(
            p.member_id,
            f"{p.field_x:.2f}",
            f"{p.field_y:.2f}",
            f"{p.facing_angle:.0f}°",
            describe_field_position(p.field_x, p.field_y),
        )
    console.print(table)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="drillbook",
        description="Drillbook - marching band drill chart tools",
    )
    p.add_argument("--config", default=None, help="Path to app config (.json/.yaml)")
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    info = sub.add_parser("info", help="Summarize a chart file")
    info.add_argument("chart", help="Path to an exported chart JSON file")
    info.set_defaults(func=cmd_info)

    validate = sub.add_parser("validate", help="Check transition feasibility")
    validate.add_argument("chart", help="Path to an exported chart JSON file")
    validate.add_argument("--bpm", type=float, default=None, help="Tempo (default: config default_bpm)")
    validate.set_defaults(func=cmd_validate)

    preview = sub.add_parser("preview", help="Show interpolated positions at a beat")
    preview.add_argument("chart", help="Path to an exported chart JSON file")
    preview.add_argument("--beat", type=float, required=True, help="Beat to sample")
    preview.set_defaults(func=cmd_preview)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if getattr(args, "bpm", None) is not None and args.bpm <= 0:
        p.error("--bpm must be positive")

    try:
        config = load_app_config(args.config)
    except (FileNotFoundError, ValueError, DrillbookError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return 1

    if args.log_level:
        config = config.model_copy(
            update={"logging": config.logging.model_copy(update={"level": args.log_level})}
        )
    configure_logging(config)

    return int(args.func(args, config))


if __name__ == "__main__":
    raise SystemExit(main())
