"""Pair expert ratings with the AI analyses they rate."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from domain.categories import Category, score_to_category
from domain.schemas import AIAnalysis, ExpertRating

logger = logging.getLogger(__name__)


class ScorePairs(BaseModel):
    """
    Parallel AI/expert arrays, one entry per (analysis, expert) rating.

    An analysis rated by several experts contributes one pair per rating,
    with its AI values repeated.
    """

    ai_lead_scores: list[float] = Field(default_factory=list)
    expert_lead_scores: list[float] = Field(default_factory=list)
    ai_icp_scores: list[float] = Field(default_factory=list)
    expert_icp_scores: list[float] = Field(default_factory=list)
    ai_categories: list[Category] = Field(default_factory=list)
    expert_categories: list[Category] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ai_lead_scores)


def index_analyses(analyses: Iterable[AIAnalysis]) -> dict[str, AIAnalysis]:
    return {a.id: a for a in analyses}


def build_score_pairs(analysis_map: dict[str, AIAnalysis], ratings: Iterable[ExpertRating]) -> ScorePairs:
    """
    Build paired arrays for lead score, ICP match and category.

    AI category is bucketed from the AI lead score; the expert category is the one the
    expert chose. Ratings whose analysis is missing from `analysis_map` are skipped.
    """
    pairs = ScorePairs()
    orphans = 0

    for rating in ratings:
        analysis = analysis_map.get(rating.analysis_id)
        if analysis is None:
            orphans += 1
            continue

        pairs.ai_lead_scores.append(analysis.lead_score)
        pairs.expert_lead_scores.append(rating.lead_score)
        pairs.ai_icp_scores.append(analysis.icp_match_percentage)
        pairs.expert_icp_scores.append(rating.icp_match_percentage)
        pairs.ai_categories.append(score_to_category(analysis.lead_score))
        pairs.expert_categories.append(rating.category)

    if orphans:
        logger.debug("Skipped %d rating(s) whose analysis was not found.", orphans)

    return pairs


def discover_component_names(ratings: Iterable[ExpertRating]) -> list[str]:
    """Component names seen in expert ratings, in first-seen order."""
    names: dict[str, None] = {}
    for rating in ratings:
        for c in rating.component_scores:
            names.setdefault(c.name, None)
    return list(names)


def build_component_pairs(
    analysis_map: dict[str, AIAnalysis],
    ratings: Iterable[ExpertRating],
    name: str,
) -> tuple[list[float], list[float]]:
    """
    AI vs expert scores for one named component.

    A rating contributes only when both its analysis and the rating itself carry the component.
    """
    ai_scores: list[float] = []
    expert_scores: list[float] = []

    for rating in ratings:
        analysis = analysis_map.get(rating.analysis_id)
        if analysis is None:
            continue

        ai_component = analysis.component(name)
        expert_component = rating.component(name)
        if ai_component is not None and expert_component is not None:
            ai_scores.append(ai_component.score)
            expert_scores.append(expert_component.score)

    return ai_scores, expert_scores
