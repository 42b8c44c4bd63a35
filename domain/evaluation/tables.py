"""Extraction field accuracy rollups and their tabular export."""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from domain.evaluation.results import ExtractionFieldMetrics
from domain.schemas import ExtractionValidation

STATUSES = ("correct", "incorrect", "partial")

TABLE_COLUMNS = ["Field", "Correct", "Incorrect", "Partial", "Total", "Accuracy (%)"]


def _field_statuses(validation: ExtractionValidation | Mapping[str, Any]) -> Iterable[tuple[str, str | None]]:
    if isinstance(validation, ExtractionValidation):
        for field, fv in validation.field_validations.items():
            yield field, fv.status
        return

    raw = validation.get("field_validations", validation.get("fieldValidations")) or {}
    for field, fv in raw.items():
        status = fv.get("status") if isinstance(fv, Mapping) else getattr(fv, "status", None)
        yield field, status


def calculate_extraction_metrics(
    validations: Iterable[ExtractionValidation | Mapping[str, Any]],
) -> list[ExtractionFieldMetrics]:
    """
    Count correct/incorrect/partial verdicts per field across all validations.

    Fields are discovered from the data (first-seen order). Unknown statuses are not counted,
    so a field seen only with unknown statuses reports total=0 and accuracy=0.

    Args:
        validations: ExtractionValidation records, or mappings with a
            `field_validations` (or `fieldValidations`) dict of {field: {"status": ...}}

    Returns:
        One ExtractionFieldMetrics per distinct field
    """
    counts: dict[str, dict[str, int]] = {}

    for v in validations:
        for field, status in _field_statuses(v):
            field_counts = counts.setdefault(field, dict.fromkeys(STATUSES, 0))
            if status in field_counts:
                field_counts[status] += 1

    results: list[ExtractionFieldMetrics] = []
    for field, c in counts.items():
        total = c["correct"] + c["incorrect"] + c["partial"]
        results.append(
            ExtractionFieldMetrics(
                field=field,
                correct=c["correct"],
                incorrect=c["incorrect"],
                partial=c["partial"],
                total=total,
                accuracy=0.0 if total == 0 else c["correct"] / total,
            )
        )
    return results


def extraction_metrics_table(metrics: list[ExtractionFieldMetrics]) -> pd.DataFrame:
    """
    Tabulate field metrics, weakest fields first.

    Sorted by accuracy ascending, then field name as a tie-breaker.
    """
    if not metrics:
        return pd.DataFrame(columns=TABLE_COLUMNS)

    rows = [
        {
            "Field": m.field,
            "Correct": m.correct,
            "Incorrect": m.incorrect,
            "Partial": m.partial,
            "Total": m.total,
            "Accuracy (%)": round(m.accuracy * 100.0, 1),
        }
        for m in metrics
    ]
    result = pd.DataFrame(rows, columns=TABLE_COLUMNS)
    return result.sort_values(["Accuracy (%)", "Field"]).reset_index(drop=True)


def extraction_metrics_table_and_save(
    metrics: list[ExtractionFieldMetrics],
    output_dir: Path,
    filename: str,
) -> Path:
    """
    Convenience wrapper: build the extraction field table and save it as CSV.

    Args:
        metrics: Output of calculate_extraction_metrics
        output_dir: Directory to save the CSV file
        filename: Output CSV filename

    Returns:
        Path to the saved CSV file
    """
    table_df = extraction_metrics_table(metrics)
    out_path = output_dir / filename
    table_df.to_csv(out_path, index=False)
    del table_df
    return out_path
