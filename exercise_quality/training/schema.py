# exercise_quality/training/schema.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

import pandas as pd

from exercise_quality.utils.errors import SchemaMismatchError


class ColumnRole(str, Enum):
    LABEL = "label"
    NUMERIC_FEATURE = "numeric_feature"
    DROPPED = "dropped"


class DropReason(str, Enum):
    MISSINGNESS = "missingness"
    IDENTIFIER = "identifier"
    NEAR_ZERO_VARIANCE = "near_zero_variance"


@dataclass(frozen=True)
class FeatureSchema:
    """
    FeatureSchema (FINAL / FROZEN)

    Semantics:
    - every raw training column has exactly ONE role
    - decided once by FeatureCleanEngine, never changed afterwards
    - feature order is the order the model is fitted with
    """

    label: str
    features: Tuple[str, ...]
    dropped: Dict[str, DropReason] = field(default_factory=dict)

    def role(self, column: str) -> ColumnRole:
        if column == self.label:
            return ColumnRole.LABEL
        if column in self.features:
            return ColumnRole.NUMERIC_FEATURE
        if column in self.dropped:
            return ColumnRole.DROPPED
        raise KeyError(f"column not in schema: {column!r}")

    @property
    def columns(self) -> Tuple[str, ...]:
        """Cleaned training columns: features + label."""
        return self.features + (self.label,)

    def project(self, frame: pd.DataFrame) -> pd.DataFrame:
        """
        Project a frame onto the schema.
        Label is kept only when the frame carries it.
        """
        missing = [c for c in self.features if c not in frame.columns]
        if missing:
            raise SchemaMismatchError(
                f"frame lacks {len(missing)} schema feature(s): {missing}"
            )

        cols = list(self.features)
        if self.label in frame.columns:
            cols.append(self.label)

        return frame.loc[:, cols].copy()


@dataclass(frozen=True, eq=False)
class CleaningReport:
    """
    What the cleaner saw and removed, per rule (report input only).
    """

    n_rows: int
    n_raw_columns: int
    missing_fraction: pd.Series
    dropped_missingness: Tuple[str, ...]
    dropped_identifier: Tuple[str, ...]
    dropped_near_zero_variance: Tuple[str, ...]
    nzv_stats: pd.DataFrame
