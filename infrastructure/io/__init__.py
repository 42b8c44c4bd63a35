"""I/O utilities: filesystem operations and snapshot loading."""

from infrastructure.io.datasets import (
    load_analyses,
    load_expert_ratings,
    load_extraction_validations,
    read_records,
)
from infrastructure.io.fs import ensure_exists, write_json

__all__ = [
    "ensure_exists",
    "write_json",
    "read_records",
    "load_analyses",
    "load_expert_ratings",
    "load_extraction_validations",
]
