"""Command-line runner — builds recruiting reports from a snapshot export."""

from typing import TypeAlias
import argparse
import logging
import sys

from rich.console import Console
from rich.table import Table

from recruiting.config import resolve_config
from recruiting.domains.analytics import DateRange, ReportResult, ReportType, Snapshot, build, build_overview
from recruiting.errors import InvalidSnapshotError, RecruitingError
from recruiting.utils.io import read_snapshot_frames, write_report
from recruiting.utils.validators import validate_referential_integrity

CheckResult: TypeAlias = dict[str, bool | str]

console = Console()

_REFERENCE_CHECKS = [
    ("applications → candidates", "applications", "candidates", "candidate_id"),
    ("applications → jobs", "applications", "jobs", "job_id"),
]


def validate_frames(frames: dict) -> list[CheckResult]:
    """Schema-check each export on its own, then check cross-references."""
    results: list[CheckResult] = []
    snapshot_parts = {}
    for name, frame in frames.items():
        try:
            snapshot_parts[name] = getattr(Snapshot.from_records(**{name: frame}), name)
            results.append({"check": name, "valid": True, "detail": f"{len(frame)} rows"})
        except InvalidSnapshotError as exc:
            results.append({"check": name, "valid": False, "detail": "; ".join(exc.errors[:3])})

    for label, child, parent, key in _REFERENCE_CHECKS:
        if child not in snapshot_parts or parent not in snapshot_parts:
            continue
        match validate_referential_integrity(snapshot_parts[child], snapshot_parts[parent], key, key):
            case {"valid": True}:
                results.append({"check": label, "valid": True, "detail": "OK"})
            case {"valid": False, "errors": errors}:
                results.append({"check": label, "valid": False, "detail": "; ".join(errors)})
    return results


def _render_scalar(value) -> str:
    match value:
        case None:
            return "-"
        case dict():
            return ", ".join(f"{k}={v}" for k, v in value.items())
        case _:
            return str(value)


def render_report(result: ReportResult) -> None:
    window = f"{result.date_range.start.date()} → {result.date_range.end.date()}"
    table = Table(title=f"{result.report_type} ({window})")
    table.add_column("Label", style="cyan")
    table.add_column("Value", justify="right")
    for label, value in result.series:
        table.add_row(label, str(value))
    console.print(table)

    summary = Table(title="Summary", show_header=False)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value")
    for key, value in result.summary.items():
        if isinstance(value, list):
            continue
        summary.add_row(key, _render_scalar(value))
    console.print(summary)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Build recruiting reports from a snapshot export")
    parser.add_argument("--snapshot", required=True, help="Directory holding the CSV exports")
    parser.add_argument("--report", type=str, choices=[str(t) for t in ReportType], help="Report to build")
    parser.add_argument("--start", type=str, help="Window start (YYYY-MM-DD)")
    parser.add_argument("--end", type=str, help="Window end (YYYY-MM-DD), inclusive")
    parser.add_argument("--format", choices=["table", "json"], default="table")
    parser.add_argument("--output", type=str, help="Also write the report to this path")
    parser.add_argument("--overview", action="store_true", help="Print dashboard KPIs")
    parser.add_argument("--validate", action="store_true", help="Only validate the snapshot")
    parser.add_argument("--env", type=str, help="Configuration environment")
    args = parser.parse_args(argv)

    config = resolve_config(args.env)
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        frames = read_snapshot_frames(args.snapshot)

        if args.validate:
            results = validate_frames(frames)
            table = Table(title="Snapshot Validation")
            table.add_column("Check")
            table.add_column("Valid")
            table.add_column("Details")
            for r in results:
                status = "[green]✓[/green]" if r["valid"] else "[red]✗[/red]"
                table.add_row(r["check"], status, r["detail"])
            console.print(table)
            if not all(r["valid"] for r in results):
                sys.exit(1)
            return

        snapshot = Snapshot.from_records(**frames)

        if args.overview:
            console.print_json(data=build_overview(snapshot, precision=config.reporting.time_to_hire_precision))
            return

        if not args.report:
            parser.error("one of --report, --overview or --validate is required")

        match (args.start, args.end):
            case (None, None):
                date_range = DateRange.last_days(config.reporting.default_window_days)
            case (start, end) if start and end:
                date_range = DateRange(start=start, end=end)
            case _:
                parser.error("--start and --end must be given together")

        result = build(args.report, date_range, snapshot, precision=config.reporting.time_to_hire_precision)
    except (RecruitingError, FileNotFoundError) as exc:
        console.print(f"[red]ERROR: {exc}[/red]")
        sys.exit(1)

    match args.format:
        case "json":
            console.print_json(data=result.to_dict())
        case "table":
            render_report(result)

    if args.output:
        write_report(result.to_dict(), args.output, fmt=config.reporting.output_format)


if __name__ == "__main__":
    main()
