# exercise_quality/training/engines/model_evaluate_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import cohen_kappa_score, confusion_matrix

from exercise_quality.training.engines.fitted_model import FittedModel
from exercise_quality.utils.errors import DegenerateDataError


@dataclass(frozen=True, eq=False)
class EvaluationResult:
    """
    Read-only summary of the model on the validation partition.
    confusion: rows = true label, columns = predicted label.
    """
    confusion: pd.DataFrame
    accuracy: float
    out_of_sample_error: float
    kappa: float
    sensitivity: pd.Series
    importance: List[Tuple[str, float]]
    n_samples: int


class ModelEvaluateEngine:
    """
    ModelEvaluateEngine (FINAL / FROZEN)

    Responsibility:
    - Score a FittedModel on held-out data
    - Return pure metrics (no side effects)

    Contract:
    - accuracy = trace(confusion) / sum(confusion)
    - out_of_sample_error = 1 - accuracy
    - importance truncated to top_n
    """

    def evaluate(
        self,
        *,
        model: FittedModel,
        X: pd.DataFrame,
        y: pd.Series,
        top_n: int = 20,
    ) -> EvaluationResult:
        if len(X) == 0:
            raise DegenerateDataError("[ModelEvaluateEngine] empty validation set")

        y_pred = model.predict(X)

        labels = self._labels(model, y)
        cm = confusion_matrix(y, y_pred, labels=labels)

        confusion = pd.DataFrame(
            cm,
            index=pd.Index(labels, name="true"),
            columns=pd.Index(labels, name="predicted"),
        )

        total = int(cm.sum())
        accuracy = float(np.trace(cm)) / total

        row_totals = cm.sum(axis=1)
        with np.errstate(divide="ignore", invalid="ignore"):
            sens = np.where(row_totals > 0, np.diag(cm) / row_totals, np.nan)

        return EvaluationResult(
            confusion=confusion,
            accuracy=accuracy,
            out_of_sample_error=1.0 - accuracy,
            kappa=float(cohen_kappa_score(y, y_pred, labels=labels)),
            sensitivity=pd.Series(sens, index=labels, name="sensitivity"),
            importance=model.importance()[:top_n],
            n_samples=total,
        )

    @staticmethod
    def _labels(model: FittedModel, y: pd.Series) -> List[Any]:
        """Model classes first, then any unseen true label."""
        labels = list(model.classes)
        unseen = sorted(set(y.unique().tolist()) - set(labels), key=str)
        return labels + unseen
