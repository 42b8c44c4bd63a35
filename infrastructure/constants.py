from pathlib import Path

# Repo-root conventional directories/files (overrideable via validation.yaml)
CONFIG_DIR = Path("configs")
VALIDATION_CONFIG_FILE = CONFIG_DIR / "validation.yaml"

DATA_DIR = Path("dataset")
DEFAULT_TENANT = "default"
