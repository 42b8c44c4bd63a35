"""Validation metrics workflow and summary logging."""

import logging
from collections.abc import Sequence
from pathlib import Path

from opik import track

from application.pairing import (
    build_component_pairs,
    build_score_pairs,
    discover_component_names,
    index_analyses,
)
from application.report import (
    ClassificationReport,
    ComponentAnalysis,
    CorrelationReport,
    ErrorMetrics,
    InterRaterReliability,
    SampleInfo,
    ValidationMetrics,
)
from domain.evaluation import (
    accuracy,
    build_confusion_matrix,
    calculate_extraction_metrics,
    cohens_kappa,
    macro_f1,
    mean_absolute_error,
    pearson_correlation,
    per_category_metrics,
    root_mean_square_error,
    weighted_f1,
    weighted_kappa,
)
from domain.schemas import AIAnalysis, ExpertRating, ExtractionValidation
from infrastructure.config.models import StatsConfig

logger = logging.getLogger(__name__)


def select_analyses(analyses: Sequence[AIAnalysis], include_archived: bool) -> list[AIAnalysis]:
    if include_archived:
        return list(analyses)
    return [a for a in analyses if not a.is_archived]


def compute_sample_info(analyses: Sequence[AIAnalysis], ratings: Sequence[ExpertRating]) -> SampleInfo:
    unique_experts = list(dict.fromkeys(r.expert_name for r in ratings))
    return SampleInfo(
        total_analyses=len(analyses),
        total_ratings=len(ratings),
        unique_experts=unique_experts,
        blind_rating_count=sum(1 for r in ratings if r.blind_rating),
        rated_analyses=len({r.analysis_id for r in ratings}),
    )


def compute_component_analysis(
    analyses: Sequence[AIAnalysis],
    ratings: Sequence[ExpertRating],
    stats_cfg: StatsConfig,
) -> list[ComponentAnalysis]:
    """Pearson r and MAE per named component with enough usable pairs."""
    analysis_map = index_analyses(analyses)
    results: list[ComponentAnalysis] = []

    for name in discover_component_names(ratings):
        ai_scores, expert_scores = build_component_pairs(analysis_map, ratings, name)
        if len(ai_scores) < stats_cfg.min_pairs_component:
            logger.debug("Component '%s': %d pair(s), below gate; skipped.", name, len(ai_scores))
            continue
        results.append(
            ComponentAnalysis(
                name=name,
                pearson=pearson_correlation(ai_scores, expert_scores, normal_approx_df=stats_cfg.normal_approx_df),
                mae=mean_absolute_error(ai_scores, expert_scores),
                n=len(ai_scores),
            )
        )
    return results


@track(
    name="Lead.validation.metrics",
    type="general",
    metadata={"task": "expert_vs_ai_validation"},
)
def compute_validation_metrics(
    analyses: Sequence[AIAnalysis],
    ratings: Sequence[ExpertRating],
    extraction_validations: Sequence[ExtractionValidation],
    stats_cfg: StatsConfig,
) -> ValidationMetrics:
    """
    Build the expert-vs-AI validation report from one snapshot of analyses and ratings.

    Each section is computed only when its minimum-sample gate is met:
      - inter_rater_reliability: >= min_pairs_reliability paired categories
      - correlation: >= min_pairs_correlation paired scores
      - error_metrics, confusion_matrix, classification_metrics: >= min_pairs_classification pairs
      - component_analysis: >= min_pairs_component ratings, then per-component pair gate
      - extraction_metrics: at least one extraction validation

    Args:
        analyses: AI analyses for the tenant
        ratings: Expert ratings for the tenant
        extraction_validations: Expert extraction validations for the tenant
        stats_cfg: Minimum-sample gates and p-value settings

    Returns:
        ValidationMetrics with ungated sections left as None
    """
    sample_info = compute_sample_info(analyses, ratings)

    extraction_metrics = (
        calculate_extraction_metrics(extraction_validations) if len(extraction_validations) > 0 else None
    )

    if not ratings:
        logger.info("No expert ratings yet; only sample info and extraction metrics are reported.")
        return ValidationMetrics(sample_info=sample_info, extraction_metrics=extraction_metrics)

    pairs = build_score_pairs(index_analyses(analyses), ratings)
    n_pairs = len(pairs)
    logger.info("Paired %d rating(s) with their AI analysis (%d total ratings).", n_pairs, len(ratings))

    # ----- Inter-rater reliability -----
    reliability = None
    if n_pairs >= stats_cfg.min_pairs_reliability:
        reliability = InterRaterReliability(
            cohens_kappa=cohens_kappa(pairs.ai_categories, pairs.expert_categories),
            weighted_kappa=weighted_kappa(pairs.ai_categories, pairs.expert_categories),
        )

    # ----- Correlation -----
    correlation = None
    if n_pairs >= stats_cfg.min_pairs_correlation:
        correlation = CorrelationReport(
            lead_score=pearson_correlation(
                pairs.ai_lead_scores, pairs.expert_lead_scores, normal_approx_df=stats_cfg.normal_approx_df
            ),
            icp_match=pearson_correlation(
                pairs.ai_icp_scores, pairs.expert_icp_scores, normal_approx_df=stats_cfg.normal_approx_df
            ),
        )

    # ----- Error metrics, confusion matrix, classification -----
    error_metrics = None
    cm = None
    classification = None
    if n_pairs >= stats_cfg.min_pairs_classification:
        error_metrics = ErrorMetrics(
            lead_score_mae=mean_absolute_error(pairs.ai_lead_scores, pairs.expert_lead_scores),
            lead_score_rmse=root_mean_square_error(pairs.ai_lead_scores, pairs.expert_lead_scores),
            icp_match_mae=mean_absolute_error(pairs.ai_icp_scores, pairs.expert_icp_scores),
            icp_match_rmse=root_mean_square_error(pairs.ai_icp_scores, pairs.expert_icp_scores),
        )
        cm = build_confusion_matrix(pairs.ai_categories, pairs.expert_categories)
        classification = ClassificationReport(
            per_category=per_category_metrics(cm),
            accuracy=accuracy(cm),
            macro_f1=macro_f1(cm),
            weighted_f1=weighted_f1(cm),
        )

    # ----- Component analysis -----
    component_analysis = None
    if len(ratings) >= stats_cfg.min_pairs_component:
        component_analysis = compute_component_analysis(analyses, ratings, stats_cfg)

    return ValidationMetrics(
        sample_info=sample_info,
        inter_rater_reliability=reliability,
        correlation=correlation,
        error_metrics=error_metrics,
        confusion_matrix=cm,
        classification_metrics=classification,
        component_analysis=component_analysis,
        extraction_metrics=extraction_metrics,
    )


def log_validation_summary(
    metrics: ValidationMetrics,
    metrics_path: Path,
    extraction_table_path: Path | None,
) -> None:
    """
    Log a concise, human-readable validation summary.

    Args:
        metrics: Computed validation report
        metrics_path: Path to metrics JSON file
        extraction_table_path: Path to extraction field CSV (optional)
    """
    info = metrics.sample_info
    logger.info("=== Validation Summary ===")
    logger.info(
        "Sample: analyses=%d, ratings=%d, rated analyses=%d, experts=%d, blind ratings=%d",
        info.total_analyses,
        info.total_ratings,
        info.rated_analyses,
        len(info.unique_experts),
        info.blind_rating_count,
    )

    if metrics.inter_rater_reliability is not None:
        ck = metrics.inter_rater_reliability.cohens_kappa
        wk = metrics.inter_rater_reliability.weighted_kappa
        logger.info(
            "Cohen's kappa: %.4f (%s), Po=%.4f, Pe=%.4f",
            ck.kappa,
            ck.interpretation,
            ck.observed_agreement,
            ck.expected_agreement,
        )
        logger.info("Weighted kappa: %.4f (%s)", wk.kappa, wk.interpretation)
    else:
        logger.info("Inter-rater reliability: insufficient data.")

    if metrics.correlation is not None:
        ls = metrics.correlation.lead_score
        icp = metrics.correlation.icp_match
        logger.info("Lead score Pearson r: %.4f (p=%.4g, n=%d)", ls.r, ls.p_value, ls.n)
        logger.info("ICP match Pearson r: %.4f (p=%.4g, n=%d)", icp.r, icp.p_value, icp.n)
    else:
        logger.info("Correlation: insufficient data.")

    if metrics.error_metrics is not None:
        em = metrics.error_metrics
        logger.info("Lead score MAE=%.2f RMSE=%.2f", em.lead_score_mae, em.lead_score_rmse)
        logger.info("ICP match MAE=%.2f RMSE=%.2f", em.icp_match_mae, em.icp_match_rmse)

    if metrics.confusion_matrix is not None and metrics.classification_metrics is not None:
        logger.debug("Confusion matrix (rows=AI, cols=expert):\n%s", metrics.confusion_matrix.to_frame())
        cls = metrics.classification_metrics
        logger.info("Accuracy: %.4f", cls.accuracy)
        logger.info("Macro F1: %.4f", cls.macro_f1)
        logger.info("Weighted F1: %.4f", cls.weighted_f1)
        logger.info(
            "Per-category F1: %s",
            {cat: round(m.f1, 4) for cat, m in cls.per_category.items()},
        )
        logger.info(
            "Per-category support: %s",
            {cat: m.support for cat, m in cls.per_category.items()},
        )

    if metrics.component_analysis:
        logger.info("--- Component analysis ---")
        for comp in metrics.component_analysis:
            logger.info(
                "%s: r=%.4f (p=%.4g), MAE=%.2f, n=%d",
                comp.name,
                comp.pearson.r,
                comp.pearson.p_value,
                comp.mae,
                comp.n,
            )

    if metrics.extraction_metrics is not None:
        logger.info("--- Extraction accuracy ---")
        for fm in metrics.extraction_metrics:
            logger.info("%s: %.1f%% (%d/%d correct)", fm.field, fm.accuracy * 100.0, fm.correct, fm.total)

    logger.info("--- Artifacts ---")
    logger.info("Metrics JSON: %s", metrics_path)
    if extraction_table_path is not None:
        logger.info("Extraction field table: %s", extraction_table_path)
