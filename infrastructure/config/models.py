"""Configuration models (Pydantic classes)."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from infrastructure.constants import DEFAULT_TENANT


class StatsConfig(BaseModel):
    """
    Minimum-sample gates for the validation report.

    Defaults match the dashboard behaviour; a section whose gate is not met is
    reported as null rather than zero-filled.
    """

    min_pairs_reliability: int = Field(default=2, ge=2, description="Paired categories needed for kappa.")
    min_pairs_correlation: int = Field(default=3, ge=3, description="Paired scores needed for Pearson r.")
    min_pairs_classification: int = Field(
        default=1,
        ge=1,
        description="Paired observations needed for the confusion matrix and error metrics.",
    )
    min_pairs_component: int = Field(
        default=3,
        ge=3,
        description="Ratings (and per-component pairs) needed for component analysis.",
    )
    normal_approx_df: int = Field(
        default=100,
        ge=1,
        description="Degrees of freedom above which p-values use the normal approximation.",
    )


class DataFilesConfig(BaseModel):
    """Snapshot files exported by the application database (resolved against data_dir)."""

    analyses_file: Path
    expert_ratings_file: Path
    extraction_validations_file: Path | None = None


class RunConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from validation.yaml
    - Validated and resolved by configuration loader
    - Consumed by the dataset loaders and the metrics workflow
    """

    tenant: str = Field(default=DEFAULT_TENANT, description="Account whose analyses and ratings are evaluated.")
    data_dir: Path = Field(default_factory=lambda: Path("dataset"))
    files: DataFilesConfig
    include_archived: bool = Field(
        default=True,
        description="If false, archived AI analyses are dropped (their ratings then count as orphans).",
    )

    stats: StatsConfig = Field(default_factory=StatsConfig)

    @model_validator(mode="after")
    def _validate(self) -> "RunConfig":
        if not str(self.tenant).strip():
            self.tenant = DEFAULT_TENANT
        else:
            self.tenant = str(self.tenant).strip()
        return self

    @property
    def analyses_path(self) -> Path:
        return self.data_dir / self.files.analyses_file

    @property
    def expert_ratings_path(self) -> Path:
        return self.data_dir / self.files.expert_ratings_file

    @property
    def extraction_validations_path(self) -> Path | None:
        if self.files.extraction_validations_file is None:
            return None
        return self.data_dir / self.files.extraction_validations_file
