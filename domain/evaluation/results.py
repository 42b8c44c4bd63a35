"""Result records returned by the statistics functions."""

import pandas as pd
from pydantic import BaseModel, Field

from domain.categories import CATEGORIES, Category

INSUFFICIENT_DATA = "Insufficient data"


class KappaResult(BaseModel):
    """Chance-corrected agreement between AI and expert categories."""

    kappa: float
    interpretation: str
    observed_agreement: float
    expected_agreement: float

    @classmethod
    def insufficient(cls) -> "KappaResult":
        return cls(kappa=0.0, interpretation=INSUFFICIENT_DATA, observed_agreement=0.0, expected_agreement=0.0)


class PearsonResult(BaseModel):
    """Pearson r with two-tailed p-value. r=0, p=1 is the fallback for n<3 or zero variance."""

    r: float
    p_value: float
    n: int


class ConfusionMatrix(BaseModel):
    """3x3 cross-tabulation; rows = predicted (AI), columns = actual (expert)."""

    matrix: list[list[int]]
    labels: list[Category] = Field(default_factory=lambda: list(CATEGORIES))
    total: int

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.matrix,
            index=[f"pred_{label}" for label in self.labels],
            columns=[f"expert_{label}" for label in self.labels],
        )


class ClassificationMetrics(BaseModel):
    precision: float
    recall: float
    f1: float
    support: int


class ExtractionFieldMetrics(BaseModel):
    """Per-field verdict counts across all extraction validations."""

    field: str
    correct: int
    incorrect: int
    partial: int
    total: int
    accuracy: float
