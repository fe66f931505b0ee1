# exercise_quality/training/engines/predict_engine.py
from __future__ import annotations

import pandas as pd

from exercise_quality.training.engines.fitted_model import FittedModel


class PredictEngine:
    """
    PredictEngine (FINAL / FROZEN)

    Contract:
    - exactly one label per input row, same order, same index
    - feature name / count mismatch -> SchemaMismatchError (via model)
    """

    def predict(
        self,
        *,
        model: FittedModel,
        X: pd.DataFrame,
    ) -> pd.Series:
        labels = model.predict(X)

        return pd.Series(labels, index=X.index, name="prediction")
