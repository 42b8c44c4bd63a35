import json

import pytest

from application.evaluation import compute_validation_metrics, select_analyses
from application.pairing import build_component_pairs, build_score_pairs, discover_component_names, index_analyses
from application.serialize import save_validation_metrics, validation_metrics_payload
from domain.schemas import AIAnalysis, ExpertRating, ExtractionValidation
from infrastructure.config.models import StatsConfig


def _analysis(id_: str, lead: float, icp: float, components: dict[str, float], archived: bool = False) -> AIAnalysis:
    return AIAnalysis(
        id=id_,
        lead_score=lead,
        icp_match_percentage=icp,
        component_scores=[{"name": n, "score": s, "weight": 0.25} for n, s in components.items()],
        is_archived=archived,
    )


def _rating(
    analysis_id: str,
    expert: str,
    lead: float,
    icp: float,
    category: str,
    components: dict[str, float],
    blind: bool = False,
) -> ExpertRating:
    return ExpertRating(
        analysis_id=analysis_id,
        expert_name=expert,
        lead_score=lead,
        icp_match_percentage=icp,
        category=category,
        component_scores=[{"name": n, "score": s} for n, s in components.items()],
        blind_rating=blind,
    )


@pytest.fixture
def analyses() -> list[AIAnalysis]:
    return [
        _analysis("a1", 82, 78, {"Industry Fit": 90, "Company Size": 75}),
        _analysis("a2", 55, 60, {"Industry Fit": 60, "Company Size": 50}),
        _analysis("a3", 28, 25, {"Industry Fit": 20}),
    ]


@pytest.fixture
def ratings() -> list[ExpertRating]:
    return [
        _rating("a1", "Dana", 85, 80, "hot", {"Industry Fit": 88, "Company Size": 70}, blind=True),
        _rating("a2", "Dana", 62, 58, "warm", {"Industry Fit": 65, "Company Size": 55}),
        _rating("a3", "Dana", 35, 30, "cold", {"Industry Fit": 25, "Company Size": 40}),
        _rating("a1", "Sam", 68, 72, "warm", {"Industry Fit": 80}),
        _rating("missing", "Sam", 50, 50, "warm", {"Industry Fit": 50}),
    ]


def test_pairs_skip_orphan_ratings(analyses, ratings) -> None:
    pairs = build_score_pairs(index_analyses(analyses), ratings)
    assert len(pairs) == 4
    assert pairs.ai_lead_scores == [82, 55, 28, 82]
    assert pairs.expert_lead_scores == [85, 62, 35, 68]
    assert pairs.ai_categories == ["hot", "warm", "cold", "hot"]
    assert pairs.expert_categories == ["hot", "warm", "cold", "warm"]


def test_component_pairs_need_both_sides(analyses, ratings) -> None:
    assert discover_component_names(ratings) == ["Industry Fit", "Company Size"]
    ai, expert = build_component_pairs(index_analyses(analyses), ratings, "Company Size")
    # a3 has no AI "Company Size"; Sam's rating has no expert "Company Size"
    assert ai == [75, 50]
    assert expert == [70, 55]


def test_full_report(analyses, ratings) -> None:
    extraction = [
        ExtractionValidation(company_id="c1", expert_name="Dana", field_validations={"industry": {"status": "correct"}})
    ]
    metrics = compute_validation_metrics(analyses, ratings, extraction, StatsConfig())

    info = metrics.sample_info
    assert info.total_analyses == 3
    assert info.total_ratings == 5
    assert info.unique_experts == ["Dana", "Sam"]
    assert info.blind_rating_count == 1
    assert info.rated_analyses == 4

    assert metrics.inter_rater_reliability is not None
    assert metrics.inter_rater_reliability.cohens_kappa.observed_agreement == pytest.approx(0.75)
    assert metrics.correlation is not None
    assert metrics.correlation.lead_score.n == 4
    assert metrics.correlation.lead_score.r > 0.9

    assert metrics.error_metrics is not None
    assert metrics.error_metrics.lead_score_mae == pytest.approx((3 + 7 + 7 + 14) / 4)

    assert metrics.confusion_matrix is not None
    assert metrics.confusion_matrix.total == 4
    cls = metrics.classification_metrics
    assert cls is not None
    assert cls.accuracy == pytest.approx(0.75)
    assert {c: m.support for c, m in cls.per_category.items()} == {"hot": 1, "warm": 2, "cold": 1}

    # Only "Industry Fit" has >= 3 usable pairs
    assert metrics.component_analysis is not None
    assert [c.name for c in metrics.component_analysis] == ["Industry Fit"]
    assert metrics.component_analysis[0].n == 4

    assert metrics.extraction_metrics is not None
    assert metrics.extraction_metrics[0].accuracy == 1.0


def test_no_ratings_leaves_sections_null(analyses) -> None:
    metrics = compute_validation_metrics(analyses, [], [], StatsConfig())
    assert metrics.sample_info.total_analyses == 3
    assert metrics.sample_info.total_ratings == 0
    assert metrics.inter_rater_reliability is None
    assert metrics.correlation is None
    assert metrics.error_metrics is None
    assert metrics.confusion_matrix is None
    assert metrics.classification_metrics is None
    assert metrics.component_analysis is None
    assert metrics.extraction_metrics is None


def test_sample_gates(analyses) -> None:
    one = [_rating("a1", "Dana", 85, 80, "hot", {"Industry Fit": 88})]
    metrics = compute_validation_metrics(analyses, one, [], StatsConfig())
    assert metrics.inter_rater_reliability is None
    assert metrics.correlation is None
    assert metrics.confusion_matrix is not None
    assert metrics.error_metrics is not None

    two = one + [_rating("a2", "Dana", 62, 58, "warm", {"Industry Fit": 65})]
    metrics = compute_validation_metrics(analyses, two, [], StatsConfig())
    assert metrics.inter_rater_reliability is not None
    assert metrics.correlation is None
    assert metrics.component_analysis is None


def test_orphans_only_give_null_sections(analyses) -> None:
    orphans = [_rating("nope", "Dana", 85, 80, "hot", {"Industry Fit": 88})] * 3
    metrics = compute_validation_metrics(analyses, orphans, [], StatsConfig())
    assert metrics.sample_info.total_ratings == 3
    assert metrics.inter_rater_reliability is None
    assert metrics.confusion_matrix is None
    assert metrics.component_analysis == []


def test_select_analyses_drops_archived() -> None:
    analyses = [_analysis("a1", 80, 80, {}), _analysis("a2", 20, 20, {}, archived=True)]
    assert [a.id for a in select_analyses(analyses, include_archived=True)] == ["a1", "a2"]
    assert [a.id for a in select_analyses(analyses, include_archived=False)] == ["a1"]


def test_serialized_report_keeps_nulls(tmp_path, analyses) -> None:
    metrics = compute_validation_metrics(analyses, [], [], StatsConfig())
    payload = validation_metrics_payload(metrics, include_run_context=False)
    assert payload["correlation"] is None
    assert "run" not in payload

    path = save_validation_metrics(metrics, tmp_path / "out" / "metrics.json")
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["inter_rater_reliability"] is None
    assert saved["sample_info"]["total_analyses"] == 3
    assert set(saved["run"]) == {"run_tag", "run_id_full", "tenant"}
