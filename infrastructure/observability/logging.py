"""
Run-scoped logging for validation runs.

Every record is stamped with a short run tag and the tenant whose snapshot is
being evaluated, taken from contextvars. The same values are returned by
`get_log_context` so report artifacts can be matched with their log lines.
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

UNSET = "-"

cv_run_tag = contextvars.ContextVar("run_tag", default=UNSET)
cv_tenant = contextvars.ContextVar("tenant", default=UNSET)
# Not printed on each line; the tag is derived from it
cv_run_id_full = contextvars.ContextVar("run_id_full", default=UNSET)

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] r=%(run)s t=%(tenant)s | %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s | r=%(run)s t=%(tenant)s | %(message)s"

# HTTP clients used by the Opik SDK are chatty at DEBUG
THIRD_PARTY_LEVELS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "urllib3": logging.WARNING,
    "opik": logging.INFO,
}


def make_run_tag(run_id_full: str, length: int = 8) -> str:
    """Short, stable tag for a run id (BLAKE2s hex prefix)."""
    digest = hashlib.blake2s(run_id_full.encode("utf-8"), digest_size=8).hexdigest()
    return digest[:length]


class ContextInjectFilter(logging.Filter):
    """Adds `run` and `tenant` attributes used by the formats above."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run = cv_run_tag.get() or UNSET
        record.tenant = cv_tenant.get() or UNSET
        return True


def set_log_context(*, run_id_full: str | None = None, tenant: str | None = None) -> None:
    if run_id_full is not None:
        cv_run_id_full.set(str(run_id_full))
        cv_run_tag.set(make_run_tag(str(run_id_full)))
    if tenant is not None:
        cv_tenant.set(str(tenant))


def get_log_context() -> dict[str, str]:
    """Current run tag, full run id and tenant; '-' for anything not set yet."""
    return {
        "run_tag": str(cv_run_tag.get() or UNSET),
        "run_id_full": str(cv_run_id_full.get() or UNSET),
        "tenant": str(cv_tenant.get() or UNSET),
    }


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ContextInjectFilter())
    root.addHandler(handler)


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,
    backup_count: int = 5,
) -> None:
    """
    Install console (and optionally rotating file) handlers on the root logger.

    Safe to call again: previously installed root handlers are removed first.

    Args:
        log_file: run.log inside the run folder; None logs to console only
        console_level: Console threshold
        file_level: File threshold
        max_bytes: Rotation size of the log file
        backup_count: Rotated files kept
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    _attach(root, logging.StreamHandler(), console_level, logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(
            root,
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"),
            file_level,
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"),
        )

    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured (console=%s, file=%s)",
        logging.getLevelName(console_level),
        log_file if log_file is not None else "none",
    )
