"""Pearson correlation between AI and expert scores, with a two-tailed t-test p-value."""

from collections.abc import Sequence

import numpy as np
from scipy import special

from domain.evaluation.results import PearsonResult

NORMAL_APPROX_DF = 100


def normal_cdf(z: float) -> float:
    """Standard normal CDF."""
    return float(special.ndtr(z))


def t_distribution_p_value(t: float, df: int, *, normal_approx_df: int = NORMAL_APPROX_DF) -> float:
    """
    Two-tailed p-value for a Student-t statistic.

    For df > normal_approx_df the t distribution is replaced by the standard normal.
    Otherwise P(|T| > t) = I_x(df/2, 1/2) with x = df / (df + t^2), the regularized
    incomplete beta function.

    Args:
        t: t statistic (sign is ignored)
        df: Degrees of freedom (n - 2 for a correlation)
        normal_approx_df: Degrees of freedom above which the normal approximation is used

    Returns:
        p-value clipped to [0, 1]
    """
    t = abs(t)
    if np.isinf(t):
        return 0.0
    if df > normal_approx_df:
        p = 2.0 * (1.0 - normal_cdf(t))
    else:
        x = df / (df + t * t)
        p = float(special.betainc(df / 2.0, 0.5, x))
    return float(min(1.0, max(0.0, p)))


def pearson_correlation(
    x: Sequence[float],
    y: Sequence[float],
    *,
    normal_approx_df: int = NORMAL_APPROX_DF,
) -> PearsonResult:
    """
    Pearson r = cov(x, y) / (std(x) * std(y)) with significance test.

    Returns r=0, p=1 (not an error) when lengths differ, n < 3,
    or either series has zero variance.
    """
    n = len(x)
    if n != len(y) or n < 3:
        return PearsonResult(r=0.0, p_value=1.0, n=n)

    xa = np.asarray(x, dtype=float)
    ya = np.asarray(y, dtype=float)
    dx = xa - xa.mean()
    dy = ya - ya.mean()

    sum_x2 = float(np.dot(dx, dx))
    sum_y2 = float(np.dot(dy, dy))
    if sum_x2 == 0 or sum_y2 == 0:
        return PearsonResult(r=0.0, p_value=1.0, n=n)

    r = float(np.dot(dx, dy) / np.sqrt(sum_x2 * sum_y2))
    r = min(1.0, max(-1.0, r))

    if abs(r) >= 1.0:
        # Perfect linear relation: t is infinite
        return PearsonResult(r=r, p_value=0.0, n=n)

    t = r * np.sqrt((n - 2) / (1.0 - r * r))
    p_value = t_distribution_p_value(float(t), n - 2, normal_approx_df=normal_approx_df)
    return PearsonResult(r=r, p_value=p_value, n=n)
