# exercise_quality/config/training_config.py
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class TrainingConfig(BaseModel):
    """
    TrainingConfig (BATCH / FINAL / FROZEN)

    Every constant of a run lives here; the same seed is handed
    explicitly to the partition and train engines.
    """

    # feature cleaning
    missing_threshold: float = 0.6
    id_prefix_columns: int = Field(default=7, ge=0)
    freq_cut: float = 95 / 5
    unique_cut: float = 10.0

    # partition
    train_fraction: float = 0.7

    # model
    cv_folds: int = Field(default=5, ge=2)
    n_trees: int = Field(default=100, ge=1)
    max_features_grid: List[Union[str, int, float, None]] = Field(
        default_factory=lambda: ["sqrt"]
    )
    seed: int = 12345
    n_jobs: Optional[int] = -1

    # report
    top_n_importance: int = Field(default=20, ge=1)
    correlation_features: int = Field(default=20, ge=2)
    write_prediction_files: bool = False

    @field_validator("missing_threshold", "train_fraction")
    @classmethod
    def _open_unit_interval(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError(f"must be in (0, 1), got {v}")
        return v

    @field_validator("max_features_grid")
    @classmethod
    def _non_empty_grid(cls, v: list) -> list:
        if not v:
            raise ValueError("max_features_grid must not be empty")
        return v
