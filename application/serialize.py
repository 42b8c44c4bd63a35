"""Validation report serialization."""

import logging
from pathlib import Path

from application.report import ValidationMetrics
from infrastructure.io.fs import write_json
from infrastructure.observability.logging import get_log_context

logger = logging.getLogger(__name__)


def validation_metrics_payload(metrics: ValidationMetrics, *, include_run_context: bool = True) -> dict:
    """
    JSON-ready dict of the report; ungated sections serialize as null.

    When include_run_context is set, a `run` block carries the log context
    (run tag, tenant) so the artifact can be matched with its log lines.
    """
    payload = metrics.model_dump(mode="json")
    if include_run_context:
        payload["run"] = get_log_context()
    return payload


def save_validation_metrics(metrics: ValidationMetrics, metrics_path: Path) -> Path:
    write_json(metrics_path, validation_metrics_payload(metrics))
    logger.info("Saved metrics JSON: %s", metrics_path)
    return metrics_path
