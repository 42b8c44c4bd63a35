"""Hot/warm/cold category scale and score bucketing."""

from typing import Literal

Category = Literal["hot", "warm", "cold"]

# Fixed ordinal order: index 0 = hot, 1 = warm, 2 = cold.
CATEGORIES: tuple[Category, ...] = ("hot", "warm", "cold")

HOT_THRESHOLD = 70
WARM_THRESHOLD = 40


def score_to_category(score: float) -> Category:
    """
    Bucket a numeric lead score into a category.

    Examples:
        >>> score_to_category(70)
        'hot'
        >>> score_to_category(69)
        'warm'
        >>> score_to_category(39)
        'cold'

    Scores outside 0-100 are still bucketed (negative -> cold, >100 -> hot).
    """
    if score >= HOT_THRESHOLD:
        return "hot"
    if score >= WARM_THRESHOLD:
        return "warm"
    return "cold"


def category_index(category: str) -> int:
    """Matrix index of a category; raises ValueError for anything outside the scale."""
    try:
        return CATEGORIES.index(category)  # ty: ignore
    except ValueError:
        raise ValueError(f"Unknown category {category!r}; expected one of {list(CATEGORIES)}") from None


def normalize_category(raw: object) -> Category:
    """Strip and lower-case a raw category label, then check it is on the scale."""
    s = str(raw).strip().lower() if raw is not None else ""
    category_index(s)
    return s  # ty: ignore
