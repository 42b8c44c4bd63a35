"""
Configuration management: models, loading, and validation.

Handles:
- RunConfig: Main validation-run configuration
- DataFilesConfig: Snapshot file locations
- StatsConfig: Minimum-sample gates and p-value settings

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import load_run_config
from infrastructure.config.models import (
    DataFilesConfig,
    RunConfig,
    StatsConfig,
)

__all__ = [
    # Main config (most commonly used)
    "RunConfig",
    "load_run_config",
    # Data files
    "DataFilesConfig",
    # Stats
    "StatsConfig",
]
