"""Configuration loading from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from infrastructure.config.models import DataFilesConfig, RunConfig, StatsConfig
from infrastructure.constants import DATA_DIR, DEFAULT_TENANT


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def load_run_config(config_path: Path) -> RunConfig:
    """
    Load validation.yaml and construct a fully-resolved RunConfig.

    Required keys: analyses_file, expert_ratings_file.
    Optional keys: tenant, data_dir, extraction_validations_file, include_archived, stats.
    """
    exp = _load_yaml(config_path)

    for key in ("analyses_file", "expert_ratings_file"):
        if not exp.get(key):
            raise ValueError(f"validation.yaml missing required key: {key}")

    extraction_file = exp.get("extraction_validations_file")

    files = DataFilesConfig(
        analyses_file=Path(str(exp["analyses_file"])),
        expert_ratings_file=Path(str(exp["expert_ratings_file"])),
        extraction_validations_file=Path(str(extraction_file)) if extraction_file else None,
    )

    stats_raw = exp.get("stats") or {}
    if not isinstance(stats_raw, dict):
        raise ValueError(f"'stats' must be a mapping in {config_path}")

    cfg = RunConfig(
        tenant=str(exp.get("tenant") or DEFAULT_TENANT),
        data_dir=Path(exp.get("data_dir") or DATA_DIR),
        files=files,
        include_archived=True if exp.get("include_archived") is None else exp["include_archived"],
        stats=StatsConfig(**stats_raw),
    )

    return cfg
