"""File I/O for snapshot exports and rendered reports."""

from typing import TypeAlias
import json
from pathlib import Path

import pandas as pd
from rich.console import Console

FilePath: TypeAlias = str | Path

console = Console()

SNAPSHOT_FILES = {
    "applications": "applications.csv",
    "candidates": "candidates.csv",
    "jobs": "jobs.csv",
    "interviews": "interviews.csv",
}

# ids stay strings even when every id happens to look numeric
_ID_COLUMNS = ["application_id", "candidate_id", "job_id"]


def _read_export(path: Path) -> pd.DataFrame:
    header = pd.read_csv(path, nrows=0).columns
    dtypes = {col: str for col in _ID_COLUMNS if col in header}
    return pd.read_csv(path, dtype=dtypes, keep_default_na=True)


def read_snapshot_frames(directory: FilePath) -> dict[str, pd.DataFrame]:
    """Read a record-store export directory into one DataFrame per entity.

    ``applications.csv`` is required; the other files are optional and
    come back empty when absent.
    """
    directory = Path(directory)
    if not (directory / SNAPSHOT_FILES["applications"]).exists():
        raise FileNotFoundError(f"No applications export in {directory}")

    frames = {}
    for name, filename in SNAPSHOT_FILES.items():
        path = directory / filename
        match path.exists():
            case True:
                frames[name] = _read_export(path)
                console.print(f"  Read {len(frames[name])} {name} from {path.name}")
            case False:
                console.print(f"  [yellow]{path.name} not found, using empty {name}[/yellow]")
                frames[name] = pd.DataFrame()
    return frames


def write_report(payload: dict, path: FilePath, fmt: str = "json") -> Path:
    """Write a rendered report dict to disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "json":
            path.write_text(json.dumps(payload, indent=2, default=str))
        case "csv":
            pd.DataFrame(payload["series"]).to_csv(path, index=False)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {payload.get('report_type', 'report')} to {path}")
    return path
