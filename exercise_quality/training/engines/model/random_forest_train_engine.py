# exercise_quality/training/engines/model/random_forest_train_engine.py
from __future__ import annotations

import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from exercise_quality import logs
from exercise_quality.config.training_config import TrainingConfig
from exercise_quality.training.engines.fitted_model import FittedModel
from exercise_quality.training.engines.model_train_engine import ModelTrainEngine
from exercise_quality.utils.errors import DegenerateDataError


class RandomForestTrainEngine(ModelTrainEngine):
    """
    RandomForest Batch Train Engine (FINAL)

    Semantics:
    - k-fold stratified CV over `max_features_grid`
      (a single-element grid only reports the CV accuracy estimate)
    - best candidate refit on the whole train partition
    - seed drives both fold assignment and the forest
    - retained predictors may still carry NaN (up to missing_threshold);
      the forest splits on them natively (scikit-learn >= 1.4)
    """

    cfg: TrainingConfig

    def train(
        self,
        *,
        X: pd.DataFrame,
        y: pd.Series,
        seed: int,
    ) -> FittedModel:
        self._validate(X, y)

        forest = RandomForestClassifier(
            n_estimators=self.cfg.n_trees,
            random_state=seed,
            n_jobs=self.cfg.n_jobs,
        )
        folds = StratifiedKFold(
            n_splits=self.cfg.cv_folds,
            shuffle=True,
            random_state=seed,
        )
        search = GridSearchCV(
            forest,
            param_grid={"max_features": list(self.cfg.max_features_grid)},
            scoring="accuracy",
            cv=folds,
            refit=True,
            error_score="raise",
        )
        search.fit(X, y)

        best = search.best_index_
        cv_scores = tuple(
            float(search.cv_results_[f"split{i}_test_score"][best])
            for i in range(self.cfg.cv_folds)
        )

        logs.info(
            f"[RandomForestTrainEngine] best={search.best_params_} "
            f"cv_accuracy={search.best_score_:.4f}"
        )

        estimator = search.best_estimator_
        return FittedModel(
            estimator=estimator,
            feature_names=tuple(str(c) for c in X.columns),
            classes=tuple(estimator.classes_.tolist()),
            cv_scores=cv_scores,
            best_params=dict(search.best_params_),
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _validate(self, X: pd.DataFrame, y: pd.Series) -> None:
        if len(X) == 0 or X.shape[1] == 0:
            raise DegenerateDataError(f"empty train partition shape={X.shape}")

        if len(X) != len(y):
            raise DegenerateDataError(
                f"X / y length mismatch: {len(X)} != {len(y)}"
            )

        constant = [c for c in X.columns if X[c].nunique(dropna=True) <= 1]
        if constant:
            raise DegenerateDataError(
                f"constant predictor(s) in train partition: {constant}"
            )

        counts = y.value_counts()
        too_small = counts[counts < self.cfg.cv_folds]
        if not too_small.empty:
            raise DegenerateDataError(
                f"class(es) with fewer than {self.cfg.cv_folds} rows, "
                f"cannot build folds: {too_small.to_dict()}"
            )
