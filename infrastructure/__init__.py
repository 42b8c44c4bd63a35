"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Configuration loading (YAML)
- Snapshot loading (JSON / JSON Lines exports of analyses, ratings, validations)
- Observability (logging context)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    RunConfig,
    StatsConfig,
    load_run_config,
)

__all__ = [
    # Configuration (most commonly used)
    "load_run_config",
    "RunConfig",
    "StatsConfig",
]
