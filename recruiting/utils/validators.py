"""Snapshot validation utilities using pandera."""

import pandas as pd
import pandera as pa
from pandera import DataFrameSchema

from recruiting.utils.types import ValidationOutcome


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> tuple[pd.DataFrame, ValidationOutcome]:
    """Validate (and coerce) a DataFrame against a pandera schema.

    Returns the validated frame alongside an outcome dict; on failure the
    original frame is returned untouched.
    """
    try:
        validated = schema.validate(df, lazy=True)
        return validated, {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val} if isinstance(col, str):
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case {"check": check, "failure_case": val}:
                    errors.append(f"Schema check '{check}' failed: {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return df, {"valid": False, "status": "error", "errors": errors}


def find_orphans(child: pd.DataFrame, parent: pd.DataFrame, child_key: str, parent_key: str) -> list[str]:
    """Return child keys (first-seen order) that have no matching parent row."""
    known = set(parent[parent_key])
    return [key for key in child[child_key].drop_duplicates() if key not in known]


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> ValidationOutcome:
    """Validate that all child keys exist in parent."""
    orphans = find_orphans(child, parent, child_key, parent_key)

    match len(orphans):
        case 0:
            return {"valid": True, "status": "ok", "errors": []}
        case n:
            sample = orphans[:5]
            return {
                "valid": False,
                "status": "error",
                "errors": [f"Found {n} orphan keys. Sample: {sample}"],
            }
