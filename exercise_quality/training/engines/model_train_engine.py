# exercise_quality/training/engines/model_train_engine.py
from __future__ import annotations

from abc import ABC, abstractmethod

import pandas as pd

from exercise_quality.training.engines.fitted_model import FittedModel


class ModelTrainEngine(ABC):
    """
    Abstract ModelTrainEngine (FINAL)

    Batch semantics only: fit(X, y) once on the closed train partition.
    """

    def __init__(self, cfg):
        self.cfg = cfg

    @abstractmethod
    def train(
        self,
        *,
        X: pd.DataFrame,
        y: pd.Series,
        seed: int,
    ) -> FittedModel:
        """
        Returns an immutable FittedModel
        """
        raise NotImplementedError
