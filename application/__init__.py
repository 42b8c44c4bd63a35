"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure: it pairs expert
ratings with AI analyses, applies minimum-sample gates, and assembles, logs and
serializes the validation report.
"""

from application.evaluation import compute_validation_metrics, log_validation_summary, select_analyses
from application.pairing import build_component_pairs, build_score_pairs, discover_component_names
from application.report import ValidationMetrics
from application.serialize import save_validation_metrics, validation_metrics_payload

__all__ = [
    # Main workflows
    "compute_validation_metrics",
    "log_validation_summary",
    "select_analyses",
    # Pairing utilities
    "build_score_pairs",
    "build_component_pairs",
    "discover_component_names",
    # Report
    "ValidationMetrics",
    "save_validation_metrics",
    "validation_metrics_payload",
]
