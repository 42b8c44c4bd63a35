"""Application-level constants."""

from pathlib import Path

# Output filenames
METRICS_FILENAME = "metrics.json"
EXTRACTION_TABLE_FILENAME = "extraction_field_accuracy.csv"
CONFIG_SNAPSHOT_FILENAME = "config.resolved.json"
DATA_FINGERPRINT_FILENAME = "data_fingerprint.json"

# Output directory structure
OUTPUT_ROOT = Path("outputs")
LOG_FILENAME = "run.log"
