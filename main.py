"""
CLI entrypoint for the expert-vs-AI validation report.

This script performs the following steps:
- loads an optional .env (Opik credentials), configs/validation.yaml
- creates a per-run output folder under outputs/
- loads the analyses / expert ratings / extraction validations snapshot
- computes the validation metrics with minimum-sample gates
- saves metrics JSON and the extraction field accuracy table
- logs a human-readable summary of results
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path

import opik
from dotenv import load_dotenv
from opik import track

from application import (
    compute_validation_metrics,
    log_validation_summary,
    save_validation_metrics,
    select_analyses,
)
from application.constants import (
    CONFIG_SNAPSHOT_FILENAME,
    DATA_FINGERPRINT_FILENAME,
    EXTRACTION_TABLE_FILENAME,
    LOG_FILENAME,
    METRICS_FILENAME,
    OUTPUT_ROOT,
)
from domain.evaluation import extraction_metrics_table_and_save
from domain.schemas import dedupe_extraction_validations, dedupe_ratings
from infrastructure.config import load_run_config
from infrastructure.constants import VALIDATION_CONFIG_FILE
from infrastructure.io import (
    ensure_exists,
    load_analyses,
    load_expert_ratings,
    load_extraction_validations,
    write_json,
)
from infrastructure.observability import configure_logging, make_run_tag, set_log_context

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Compute expert-vs-AI lead validation metrics")
    p.add_argument(
        "--config",
        type=str,
        default=str(VALIDATION_CONFIG_FILE),
        help="Path to validation.yaml (default: configs/validation.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file, loaded if present (default: .env)",
    )
    p.add_argument(
        "--opik",
        action="store_true",
        help="Configure Opik tracing (OPIK_* environment variables) before running.",
    )
    p.add_argument(
        "--output-root",
        type=str,
        default=str(OUTPUT_ROOT),
        help="Directory under which the per-run folder is created (default: outputs)",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    return p.parse_args()


@track(
    name="Lead.validation",
    type="general",
    metadata={"task": "lead_validation_report"},
    capture_input=False,
    capture_output=False,
    flush=True,
)
def main() -> None:
    args = _parse_args()

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path = Path(args.config)
    ensure_exists(config_path, "validation.yaml")

    cfg = load_run_config(config_path)

    if args.opik:
        opik.configure()

    # ---- Per-run output folder ----
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_id = f"{ts}_{cfg.tenant}"

    run_dir = Path(args.output_root) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)

    log_path = run_dir / LOG_FILENAME
    configure_logging(
        log_file=log_path,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )

    set_log_context(run_id_full=run_id, tenant=cfg.tenant)

    logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))
    logger.info("Run output directory: %s", run_dir)

    # Load snapshot
    logger.info("Loading AI analyses from %s...", cfg.analyses_path)
    analyses = select_analyses(load_analyses(cfg.analyses_path), cfg.include_archived)

    logger.info("Loading expert ratings from %s...", cfg.expert_ratings_path)
    ratings = dedupe_ratings(load_expert_ratings(cfg.expert_ratings_path))

    extraction_path = cfg.extraction_validations_path
    extraction_validations = []
    if extraction_path is not None:
        logger.info("Loading extraction validations from %s...", extraction_path)
        extraction_validations = dedupe_extraction_validations(load_extraction_validations(extraction_path))
    else:
        logger.info("No extraction validations file configured.")

    logger.info(
        "Snapshot loaded: %d analyses, %d ratings, %d extraction validations",
        len(analyses),
        len(ratings),
        len(extraction_validations),
    )

    # Save snapshot config + data fingerprint
    write_json(run_dir / CONFIG_SNAPSHOT_FILENAME, cfg.model_dump(mode="json"))
    write_json(
        run_dir / DATA_FINGERPRINT_FILENAME,
        {
            "analyses_file": str(cfg.analyses_path),
            "expert_ratings_file": str(cfg.expert_ratings_path),
            "extraction_validations_file": str(extraction_path) if extraction_path is not None else None,
            "analyses_rows": len(analyses),
            "ratings_rows": len(ratings),
            "extraction_validation_rows": len(extraction_validations),
        },
    )

    # Metrics
    metrics = compute_validation_metrics(
        analyses=analyses,
        ratings=ratings,
        extraction_validations=extraction_validations,
        stats_cfg=cfg.stats,
    )

    metrics_path = save_validation_metrics(metrics, run_dir / METRICS_FILENAME)

    extraction_table_path = None
    if metrics.extraction_metrics is not None:
        extraction_table_path = extraction_metrics_table_and_save(
            metrics.extraction_metrics,
            output_dir=run_dir,
            filename=EXTRACTION_TABLE_FILENAME,
        )
        logger.info("Saved extraction field table to %s", extraction_table_path)

    # Human-readable summary
    log_validation_summary(
        metrics=metrics,
        metrics_path=metrics_path,
        extraction_table_path=extraction_table_path,
    )

    logger.info("Detailed log: %s", log_path)


if __name__ == "__main__":
    main()
