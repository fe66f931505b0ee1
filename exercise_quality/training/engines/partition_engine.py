# exercise_quality/training/engines/partition_engine.py
from __future__ import annotations

from dataclasses import dataclass

import pandas as pd
from sklearn.model_selection import train_test_split

from exercise_quality.utils.errors import DegenerateDataError


@dataclass(frozen=True, eq=False)
class Partition:
    """
    Two disjoint subsets of the cleaned training set.
    Original row index is preserved on both.
    """
    train: pd.DataFrame
    validation: pd.DataFrame


class PartitionEngine:
    """
    PartitionEngine (FINAL / FROZEN)

    Contract:
    - stratified by label, seed passed explicitly
    - same (frame, seed) -> same partition
    - train ∩ validation = ∅, train ∪ validation = frame
    """

    def split(
        self,
        frame: pd.DataFrame,
        *,
        label: str,
        train_fraction: float,
        seed: int,
    ) -> Partition:
        if label not in frame.columns:
            raise DegenerateDataError(f"label column {label!r} missing, cannot stratify")

        y = frame[label]
        if y.isna().any():
            raise DegenerateDataError(
                f"label column {label!r} has {int(y.isna().sum())} missing value(s)"
            )

        counts = y.value_counts()
        too_small = counts[counts < 2]
        if not too_small.empty:
            raise DegenerateDataError(
                f"class(es) too small to stratify: {too_small.to_dict()}"
            )

        try:
            train, validation = train_test_split(
                frame,
                train_size=train_fraction,
                stratify=y,
                random_state=seed,
                shuffle=True,
            )
        except ValueError as e:
            raise DegenerateDataError(f"stratified split impossible: {e}") from e

        return Partition(train=train, validation=validation)
