# exercise_quality/training/engines/schema_align_engine.py
from __future__ import annotations

from typing import List, Tuple

import pandas as pd
from pandas.api.types import is_numeric_dtype

from exercise_quality.training.schema import FeatureSchema
from exercise_quality.utils.errors import SchemaMismatchError


class SchemaAlignEngine:
    """
    SchemaAlignEngine (FINAL / FROZEN)

    Responsibility:
    - Keep test columns whose exact name is a schema feature
    - Type them as the schema says (numeric)
    - Report schema features the test data lacks

    Forbidden:
    - Computing any statistic on test data
    - Filling absent columns (PredictEngine fails on them)
    """

    def align(
        self,
        raw_test: pd.DataFrame,
        schema: FeatureSchema,
    ) -> Tuple[pd.DataFrame, List[str]]:
        """
        Returns:
            aligned_test, missing_features
        """
        wanted = set(schema.features)
        kept = [c for c in raw_test.columns if c in wanted]
        missing = [c for c in schema.features if c not in set(kept)]

        aligned = raw_test.loc[:, kept].copy()

        for col in kept:
            if is_numeric_dtype(aligned[col]):
                continue
            try:
                aligned[col] = pd.to_numeric(aligned[col], errors="raise")
            except (ValueError, TypeError) as e:
                raise SchemaMismatchError(
                    f"test column {col!r} is not numeric: {e}"
                ) from e

        return aligned, missing
