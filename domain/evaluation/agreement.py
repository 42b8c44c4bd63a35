"""
Inter-rater agreement between AI categories and expert categories.

References:
- Cohen (1960): A coefficient of agreement for nominal scales
- Landis & Koch (1977): The measurement of observer agreement for categorical data
"""

from collections.abc import Sequence

import numpy as np

from domain.categories import CATEGORIES
from domain.evaluation.metrics import count_matrix
from domain.evaluation.results import KappaResult

PE_TOLERANCE = 1e-12


def interpret_kappa(k: float) -> str:
    """Landis & Koch (1977) label; each bucket's upper bound is exclusive."""
    if k < 0:
        return "Poor (less than chance)"
    if k < 0.21:
        return "Slight"
    if k < 0.41:
        return "Fair"
    if k < 0.61:
        return "Moderate"
    if k < 0.81:
        return "Substantial"
    return "Almost Perfect"


def quadratic_weights(k: int = len(CATEGORIES)) -> np.ndarray:
    """w[i][j] = 1 - (i-j)^2 / (k-1)^2, so adjacent categories count as partial agreement."""
    idx = np.arange(k)
    return 1.0 - (idx[:, None] - idx[None, :]) ** 2 / (k - 1) ** 2


def _kappa(predicted: Sequence[str], actual: Sequence[str], weights: np.ndarray) -> KappaResult:
    if len(predicted) != len(actual) or len(predicted) == 0:
        return KappaResult.insufficient()

    n = len(predicted)
    observed = count_matrix(predicted, actual).astype(float)
    # Expected counts under independence of the two raters' marginals
    expected = np.outer(observed.sum(axis=1), observed.sum(axis=0)) / n

    po = float((weights * observed).sum() / n)
    pe = float((weights * expected).sum() / n)

    # Pe == 1 only when both raters used one and the same category
    kappa = 1.0 if abs(1.0 - pe) < PE_TOLERANCE else (po - pe) / (1.0 - pe)

    return KappaResult(
        kappa=kappa,
        interpretation=interpret_kappa(kappa),
        observed_agreement=po,
        expected_agreement=pe,
    )


def cohens_kappa(predicted: Sequence[str], actual: Sequence[str]) -> KappaResult:
    """
    Cohen's kappa, k = (Po - Pe) / (1 - Pe).

    Args:
        predicted: AI categories
        actual: Expert categories, paired with `predicted` by index

    Returns:
        KappaResult; the "Insufficient data" sentinel for empty or unequal-length input

    Raises:
        ValueError: If a value is not one of hot/warm/cold
    """
    return _kappa(predicted, actual, np.eye(len(CATEGORIES)))


def weighted_kappa(predicted: Sequence[str], actual: Sequence[str]) -> KappaResult:
    """Quadratic-weighted kappa over the ordered hot > warm > cold scale."""
    return _kappa(predicted, actual, quadratic_weights())
