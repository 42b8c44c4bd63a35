"""Pydantic models for AI analyses, expert ratings and extraction validations."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.categories import Category, normalize_category

FieldStatus = Literal["correct", "incorrect", "partial"]


class SnapshotModel(BaseModel):
    """Base for records exported by the application database (camelCase or snake_case keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ComponentScore(SnapshotModel):
    """Named component of a lead score (e.g. 'Industry Fit')."""

    name: str = Field(..., min_length=1)
    score: float = Field(..., ge=0, le=100)
    weight: float | None = Field(default=None, ge=0, le=1)  # AI side only
    reasoning: str | None = None


class AIAnalysis(SnapshotModel):
    """Machine-generated lead-quality assessment for one company."""

    id: str
    company_id: str | None = None
    lead_score: float = Field(..., ge=0, le=100)
    icp_match_percentage: float = Field(..., ge=0, le=100)
    component_scores: list[ComponentScore] = Field(default_factory=list)
    is_archived: bool = False

    def component(self, name: str) -> ComponentScore | None:
        return next((c for c in self.component_scores if c.name == name), None)


class ExpertRating(SnapshotModel):
    """One expert's independent assessment of an AI analysis, on the same scales."""

    id: str | None = None
    analysis_id: str
    expert_name: str = Field(..., min_length=1, description="Expert name is required")
    expert_role: str | None = None
    lead_score: float = Field(..., ge=0, le=100)
    icp_match_percentage: float = Field(..., ge=0, le=100)
    category: Category = Field(
        ...,
        description="Category chosen by the expert; not re-derived from lead_score.",
    )
    component_scores: list[ComponentScore] = Field(..., min_length=1)
    blind_rating: bool = False
    notes: str | None = None
    rating_duration_seconds: int | None = Field(default=None, gt=0)

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, v: object) -> str:
        return normalize_category(v)

    @field_validator("expert_name", mode="before")
    @classmethod
    def _strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    def component(self, name: str) -> ComponentScore | None:
        return next((c for c in self.component_scores if c.name == name), None)


class FieldValidation(SnapshotModel):
    """Expert verdict on one extracted company field."""

    status: FieldStatus
    corrected_value: str | None = None
    notes: str | None = None


class ExtractionValidation(SnapshotModel):
    """Per-expert review of the data extracted for one company."""

    company_id: str
    expert_name: str = Field(..., min_length=1)
    field_validations: dict[str, FieldValidation] = Field(default_factory=dict)
    overall_accuracy: Literal["high", "medium", "low"] | None = None
    notes: str | None = None


def dedupe_ratings(ratings: list[ExpertRating]) -> list[ExpertRating]:
    """
    Keep one rating per (analysis_id, expert_name), the last one seen.

    Mirrors the upsert performed when an expert re-submits a rating.
    Position of the surviving rating is that of the first occurrence.
    """
    latest: dict[tuple[str, str], ExpertRating] = {}
    for r in ratings:
        latest[(r.analysis_id, r.expert_name)] = r
    return list(latest.values())


def dedupe_extraction_validations(validations: list[ExtractionValidation]) -> list[ExtractionValidation]:
    """Keep one extraction validation per (company_id, expert_name), the last one seen."""
    latest: dict[tuple[str, str], ExtractionValidation] = {}
    for v in validations:
        latest[(v.company_id, v.expert_name)] = v
    return list(latest.values())
