"""Snapshot loading: AI analyses, expert ratings and extraction validations."""

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from domain.schemas import AIAnalysis, ExpertRating, ExtractionValidation

_ANALYSES = TypeAdapter(list[AIAnalysis])
_RATINGS = TypeAdapter(list[ExpertRating])
_EXTRACTION_VALIDATIONS = TypeAdapter(list[ExtractionValidation])


def read_records(path: Path) -> list[dict[str, Any]]:
    """
    Read a list of records from a JSON or JSON Lines file based on file extension.

    Supported formats:
    - JSON: .json (a top-level list, or an object holding a "records" or "data" list)
    - JSON Lines: .jsonl (one object per line, blank lines skipped)

    Args:
        path: Path to data file

    Returns:
        List of record dicts

    Raises:
        ValueError: If file format or layout is not supported
        FileNotFoundError: If file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()

    if suffix == ".jsonl":
        with path.open("r", encoding="utf-8") as f:
            records = [json.loads(line) for line in f if line.strip()]
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("records", data.get("data"))
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of records in {path}")
        records = data
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .json, .jsonl")

    if not all(isinstance(r, dict) for r in records):
        raise ValueError(f"Every record in {path} must be a JSON object")
    return records


def load_analyses(path: Path) -> list[AIAnalysis]:
    return _ANALYSES.validate_python(read_records(path))


def load_expert_ratings(path: Path) -> list[ExpertRating]:
    return _RATINGS.validate_python(read_records(path))


def load_extraction_validations(path: Path) -> list[ExtractionValidation]:
    return _EXTRACTION_VALIDATIONS.validate_python(read_records(path))
