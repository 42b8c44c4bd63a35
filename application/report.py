"""Aggregate validation report handed to the dashboard."""

from pydantic import BaseModel, Field

from domain.categories import Category
from domain.evaluation.results import (
    ClassificationMetrics,
    ConfusionMatrix,
    ExtractionFieldMetrics,
    KappaResult,
    PearsonResult,
)


class SampleInfo(BaseModel):
    total_analyses: int = 0
    total_ratings: int = 0
    unique_experts: list[str] = Field(default_factory=list)
    blind_rating_count: int = 0
    rated_analyses: int = 0


class InterRaterReliability(BaseModel):
    cohens_kappa: KappaResult
    weighted_kappa: KappaResult


class CorrelationReport(BaseModel):
    lead_score: PearsonResult
    icp_match: PearsonResult


class ErrorMetrics(BaseModel):
    lead_score_mae: float
    lead_score_rmse: float
    icp_match_mae: float
    icp_match_rmse: float


class ClassificationReport(BaseModel):
    per_category: dict[Category, ClassificationMetrics]
    accuracy: float
    macro_f1: float
    weighted_f1: float


class ComponentAnalysis(BaseModel):
    name: str
    pearson: PearsonResult
    mae: float
    n: int


class ValidationMetrics(BaseModel):
    """
    Full expert-vs-AI report.

    Optional sections are None when their minimum-sample gate was not met,
    so "not enough data" stays distinguishable from "computed to zero".
    """

    sample_info: SampleInfo = Field(default_factory=SampleInfo)
    inter_rater_reliability: InterRaterReliability | None = None
    correlation: CorrelationReport | None = None
    error_metrics: ErrorMetrics | None = None
    confusion_matrix: ConfusionMatrix | None = None
    classification_metrics: ClassificationReport | None = None
    component_analysis: list[ComponentAnalysis] | None = None
    extraction_metrics: list[ExtractionFieldMetrics] | None = None
