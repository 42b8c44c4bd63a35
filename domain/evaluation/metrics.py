"""Confusion matrix, classification metrics and error metrics for AI-vs-expert pairs."""

from collections.abc import Sequence

import numpy as np
from sklearn.metrics import confusion_matrix
from sklearn.metrics import mean_absolute_error as _sk_mae
from sklearn.metrics import mean_squared_error as _sk_mse

from domain.categories import CATEGORIES, Category, category_index
from domain.evaluation.results import ClassificationMetrics, ConfusionMatrix


def count_matrix(predicted: Sequence[str], actual: Sequence[str]) -> np.ndarray:
    """
    Integer k x k counts of (predicted=i, actual=j) over the paired prefix.

    Raises:
        ValueError: If a value is not one of hot/warm/cold
    """
    n = min(len(predicted), len(actual))
    predicted = list(predicted[:n])
    actual = list(actual[:n])

    # confusion_matrix silently drops labels outside `labels`
    for value in (*predicted, *actual):
        category_index(value)

    if n == 0:
        return np.zeros((len(CATEGORIES), len(CATEGORIES)), dtype=int)

    # predicted goes in as y_true so rows stay AI and columns stay expert
    return confusion_matrix(predicted, actual, labels=list(CATEGORIES))


def build_confusion_matrix(predicted: Sequence[str], actual: Sequence[str]) -> ConfusionMatrix:
    """Rows = AI (predicted), columns = expert (actual), in hot/warm/cold order."""
    counts = count_matrix(predicted, actual)
    return ConfusionMatrix(
        matrix=counts.tolist(),
        labels=list(CATEGORIES),
        total=int(counts.sum()),
    )


def _cells(cm: ConfusionMatrix) -> np.ndarray:
    return np.asarray(cm.matrix, dtype=float)


def precision(cm: ConfusionMatrix, category: Category) -> float:
    """TP / (TP + FP), i.e. diagonal over row sum; 0 when the AI never predicted it."""
    idx = category_index(category)
    m = _cells(cm)
    row_sum = m[idx, :].sum()
    return 0.0 if row_sum == 0 else float(m[idx, idx] / row_sum)


def recall(cm: ConfusionMatrix, category: Category) -> float:
    """TP / (TP + FN), i.e. diagonal over column sum; 0 when experts never chose it."""
    idx = category_index(category)
    m = _cells(cm)
    col_sum = m[:, idx].sum()
    return 0.0 if col_sum == 0 else float(m[idx, idx] / col_sum)


def support(cm: ConfusionMatrix, category: Category) -> int:
    """Number of expert (actual) instances of the category: the column sum."""
    idx = category_index(category)
    return int(sum(row[idx] for row in cm.matrix))


def f1_score(p: float, r: float) -> float:
    return 0.0 if p + r == 0 else 2 * p * r / (p + r)


def accuracy(cm: ConfusionMatrix) -> float:
    if cm.total == 0:
        return 0.0
    return float(np.trace(_cells(cm)) / cm.total)


def per_category_metrics(cm: ConfusionMatrix) -> dict[Category, ClassificationMetrics]:
    out: dict[Category, ClassificationMetrics] = {}
    for cat in CATEGORIES:
        p = precision(cm, cat)
        r = recall(cm, cat)
        out[cat] = ClassificationMetrics(precision=p, recall=r, f1=f1_score(p, r), support=support(cm, cat))
    return out


def macro_f1(cm: ConfusionMatrix) -> float:
    """Unweighted mean of per-category F1 (all three categories, even if absent)."""
    scores = [f1_score(precision(cm, c), recall(cm, c)) for c in CATEGORIES]
    return float(np.mean(scores))


def weighted_f1(cm: ConfusionMatrix) -> float:
    """Per-category F1 weighted by expert support."""
    if cm.total == 0:
        return 0.0
    total = sum(f1_score(precision(cm, c), recall(cm, c)) * support(cm, c) for c in CATEGORIES)
    return total / cm.total


def mean_absolute_error(predicted: Sequence[float], actual: Sequence[float]) -> float:
    """MAE over paired scores; 0.0 for empty or mismatched input."""
    if len(predicted) != len(actual) or len(predicted) == 0:
        return 0.0
    return float(_sk_mae(actual, predicted))


def root_mean_square_error(predicted: Sequence[float], actual: Sequence[float]) -> float:
    """RMSE over paired scores; 0.0 for empty or mismatched input."""
    if len(predicted) != len(actual) or len(predicted) == 0:
        return 0.0
    return float(np.sqrt(_sk_mse(actual, predicted)))
