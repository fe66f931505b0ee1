# exercise_quality/training/engines/fitted_model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

from exercise_quality.utils.errors import SchemaMismatchError


@dataclass(frozen=True, eq=False)
class FittedModel:
    """
    FittedModel (FINAL / FROZEN)

    Semantics:
    - pure in-memory result of one training run, no I/O
    - never mutated after creation
    - consumers use predict() and importance() only,
      the estimator behind them is an implementation detail
    """

    estimator: Any = field(repr=False)
    feature_names: Tuple[str, ...]
    classes: Tuple[Any, ...]
    cv_scores: Tuple[float, ...] = ()
    best_params: Dict[str, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Public API (FROZEN)
    # ------------------------------------------------------------------
    def predict(self, features: pd.DataFrame) -> np.ndarray:
        self.check_features(features)
        return self.estimator.predict(features.loc[:, list(self.feature_names)])

    def importance(self) -> List[Tuple[str, float]]:
        """
        Mean decrease in impurity across all trees, min-max scaled to 0-100,
        highest first.
        """
        raw = np.asarray(self.estimator.feature_importances_, dtype=float)
        lo, hi = raw.min(), raw.max()

        if hi > lo:
            scaled = (raw - lo) / (hi - lo) * 100.0
        else:
            scaled = np.full_like(raw, 100.0)

        ranked = sorted(
            zip(self.feature_names, scaled.tolist()),
            key=lambda kv: (-kv[1], kv[0]),
        )
        return ranked

    def check_features(self, features: pd.DataFrame) -> None:
        cols = [str(c) for c in features.columns]
        expected = set(self.feature_names)

        missing = [c for c in self.feature_names if c not in set(cols)]
        extra = [c for c in cols if c not in expected]

        if missing or extra or len(cols) != len(self.feature_names):
            raise SchemaMismatchError(
                f"feature vector does not match model: expected "
                f"{len(self.feature_names)} column(s), got {len(cols)}; "
                f"missing={missing} extra={extra}"
            )

    # ------------------------------------------------------------------
    # Cross-validation summary
    # ------------------------------------------------------------------
    @property
    def cv_mean(self) -> float:
        return float(np.mean(self.cv_scores)) if self.cv_scores else float("nan")

    @property
    def cv_std(self) -> float:
        return float(np.std(self.cv_scores)) if self.cv_scores else float("nan")
