# exercise_quality/training/engines/feature_clean_engine.py
from __future__ import annotations

from typing import List, Tuple

import pandas as pd
from pandas.api.types import is_numeric_dtype

from exercise_quality.training.schema import (
    CleaningReport,
    DropReason,
    FeatureSchema,
)
from exercise_quality.utils.errors import DegenerateDataError, SchemaMismatchError


class FeatureCleanEngine:
    """
    FeatureCleanEngine (FINAL / FROZEN)

    Responsibility:
    - Decide the role of every raw training column, ONCE
    - Rules run in this exact order, each on the survivors of the previous:
        1) missingness     : missing fraction > missing_threshold (strict)
        2) identifier      : first `id_prefix_columns` surviving columns
                             (positional window; a label inside the window
                             is skipped, not replaced, so fewer columns drop)
        3) near-zero var   : frequency ratio + percent unique screen

    Contract (FROZEN):
    - label column is exempt from every rule
    - statistics come from training data only
    - surviving predictors must be numeric
    """

    def __init__(
        self,
        *,
        missing_threshold: float = 0.6,
        id_prefix_columns: int = 7,
        freq_cut: float = 95 / 5,
        unique_cut: float = 10.0,
    ):
        self.missing_threshold = missing_threshold
        self.id_prefix_columns = id_prefix_columns
        self.freq_cut = freq_cut
        self.unique_cut = unique_cut

    # ======================================================================
    # Public API
    # ======================================================================
    def clean(
        self,
        raw: pd.DataFrame,
        *,
        label: str,
    ) -> Tuple[FeatureSchema, CleaningReport]:
        if label not in raw.columns:
            raise SchemaMismatchError(f"label column {label!r} not in training data")
        if len(raw) == 0:
            raise DegenerateDataError("training data has no rows")

        columns = list(raw.columns)
        missing_fraction = raw.isna().mean()

        # 1) missingness
        dropped_missing = self.high_missingness(missing_fraction, label=label)
        columns = [c for c in columns if c not in set(dropped_missing)]

        # 2) identifier / timestamp prefix, the window does not shift past the label
        dropped_id = [c for c in columns[: self.id_prefix_columns] if c != label]
        columns = [c for c in columns if c not in set(dropped_id)]

        # 3) near-zero variance
        predictors = [c for c in columns if c != label]
        nzv_stats = self.near_zero_variance(raw[predictors])
        dropped_nzv = [c for c in predictors if bool(nzv_stats.at[c, "nzv"])]
        features = [c for c in predictors if c not in set(dropped_nzv)]

        self._check_numeric(raw, features)

        dropped = {c: DropReason.MISSINGNESS for c in dropped_missing}
        dropped.update({c: DropReason.IDENTIFIER for c in dropped_id})
        dropped.update({c: DropReason.NEAR_ZERO_VARIANCE for c in dropped_nzv})

        schema = FeatureSchema(
            label=label,
            features=tuple(features),
            dropped=dropped,
        )

        report = CleaningReport(
            n_rows=len(raw),
            n_raw_columns=raw.shape[1],
            missing_fraction=missing_fraction,
            dropped_missingness=tuple(dropped_missing),
            dropped_identifier=tuple(dropped_id),
            dropped_near_zero_variance=tuple(dropped_nzv),
            nzv_stats=nzv_stats,
        )

        return schema, report

    # ======================================================================
    # Rules (atomic & testable)
    # ======================================================================
    def high_missingness(
        self,
        missing_fraction: pd.Series,
        *,
        label: str,
    ) -> List[str]:
        return [
            c
            for c, frac in missing_fraction.items()
            if c != label and frac > self.missing_threshold
        ]

    def near_zero_variance(self, frame: pd.DataFrame) -> pd.DataFrame:
        """
        Per column, over non-missing values:
            freq_ratio     = count(most common) / count(second most common)
                             (0 when there are fewer than two distinct values)
            percent_unique = 100 * n_distinct / n_rows
            zero_var       = n_distinct <= 1
            nzv            = (freq_ratio > freq_cut and percent_unique <= unique_cut)
                             or zero_var
        """
        records = []
        n_rows = len(frame)

        for col in frame.columns:
            counts = frame[col].dropna().value_counts()
            n_distinct = len(counts)

            if n_distinct <= 1:
                freq_ratio = 0.0
            else:
                freq_ratio = float(counts.iloc[0]) / float(counts.iloc[1])

            percent_unique = 100.0 * n_distinct / n_rows if n_rows else 0.0
            zero_var = n_distinct <= 1

            nzv = (
                freq_ratio > self.freq_cut and percent_unique <= self.unique_cut
            ) or zero_var

            records.append(
                {
                    "column": col,
                    "freq_ratio": freq_ratio,
                    "percent_unique": percent_unique,
                    "zero_var": zero_var,
                    "nzv": nzv,
                }
            )

        stats = pd.DataFrame.from_records(
            records,
            columns=["column", "freq_ratio", "percent_unique", "zero_var", "nzv"],
        )
        return stats.set_index("column")

    @staticmethod
    def _check_numeric(raw: pd.DataFrame, features: List[str]) -> None:
        non_numeric = [c for c in features if not is_numeric_dtype(raw[c])]
        if non_numeric:
            raise SchemaMismatchError(
                f"predictor(s) cannot be typed as numeric features: {non_numeric}"
            )
