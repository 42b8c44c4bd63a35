"""
Expert-vs-AI validation statistics.

Provides:
- Inter-rater agreement (Cohen's kappa, quadratic-weighted kappa)
- Pearson correlation with t-test significance
- Confusion matrix, precision/recall/F1, accuracy, error metrics (MAE, RMSE)
- Extraction field accuracy rollups

All functions are pure (depend only on numpy, scipy, sklearn, pandas) and return
defined fallback values for degenerate input; *_and_save helpers write outputs to disk.
"""

from domain.evaluation.agreement import cohens_kappa, interpret_kappa, weighted_kappa
from domain.evaluation.correlation import normal_cdf, pearson_correlation, t_distribution_p_value
from domain.evaluation.metrics import (
    accuracy,
    build_confusion_matrix,
    f1_score,
    macro_f1,
    mean_absolute_error,
    per_category_metrics,
    precision,
    recall,
    root_mean_square_error,
    support,
    weighted_f1,
)
from domain.evaluation.results import (
    ClassificationMetrics,
    ConfusionMatrix,
    ExtractionFieldMetrics,
    KappaResult,
    PearsonResult,
)
from domain.evaluation.tables import (
    calculate_extraction_metrics,
    extraction_metrics_table,
    extraction_metrics_table_and_save,
)

__all__ = [
    # Agreement
    "cohens_kappa",
    "weighted_kappa",
    "interpret_kappa",
    # Correlation
    "pearson_correlation",
    "t_distribution_p_value",
    "normal_cdf",
    # Classification / error metrics
    "build_confusion_matrix",
    "precision",
    "recall",
    "support",
    "f1_score",
    "accuracy",
    "macro_f1",
    "weighted_f1",
    "per_category_metrics",
    "mean_absolute_error",
    "root_mean_square_error",
    # Extraction
    "calculate_extraction_metrics",
    "extraction_metrics_table",
    "extraction_metrics_table_and_save",
    # Result records
    "KappaResult",
    "PearsonResult",
    "ConfusionMatrix",
    "ClassificationMetrics",
    "ExtractionFieldMetrics",
]
