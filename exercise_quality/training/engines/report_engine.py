# exercise_quality/training/engines/report_engine.py
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from exercise_quality.training.engines.fitted_model import FittedModel
from exercise_quality.training.engines.model_evaluate_engine import EvaluationResult
from exercise_quality.training.schema import CleaningReport, FeatureSchema


class ReportEngine:
    """
    ReportEngine (FINAL / FROZEN)

    Responsibility:
    - Render charts (PNG) and the run summary (report.md)
    - No metric is computed here, only rendered
    """

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------
    def plot_class_distribution(self, y: pd.Series, out_dir: Path) -> Path:
        path = out_dir / "class_distribution.png"
        counts = y.value_counts().sort_index()

        fig = plt.figure(figsize=(6, 4))
        plt.bar([str(c) for c in counts.index], counts.values)
        plt.title(f"Class distribution ({y.name})")
        plt.xlabel(str(y.name))
        plt.ylabel("Count")
        plt.tight_layout()
        fig.savefig(path)
        plt.close(fig)

        return path

    def plot_missingness(
        self,
        missing_fraction: pd.Series,
        threshold: float,
        out_dir: Path,
    ) -> Path:
        path = out_dir / "missingness.png"

        fig = plt.figure(figsize=(8, 4))
        plt.hist(missing_fraction.values, bins=20, range=(0.0, 1.0))
        plt.axvline(threshold, linestyle="--", color="red", label=f"threshold={threshold}")
        plt.title("Missing fraction per column")
        plt.xlabel("Missing fraction")
        plt.ylabel("Columns")
        plt.legend()
        plt.tight_layout()
        fig.savefig(path)
        plt.close(fig)

        return path

    def plot_correlation(
        self,
        X: pd.DataFrame,
        max_features: int,
        out_dir: Path,
    ) -> Path:
        path = out_dir / "correlation.png"
        subset = X.iloc[:, :max_features]
        corr = subset.corr()

        fig = plt.figure(figsize=(9, 8))
        plt.imshow(corr.values, cmap="RdBu_r", vmin=-1.0, vmax=1.0)
        plt.colorbar(fraction=0.046, pad=0.04)
        plt.xticks(range(len(corr.columns)), corr.columns, rotation=90, fontsize=7)
        plt.yticks(range(len(corr.index)), corr.index, fontsize=7)
        plt.title(f"Correlation matrix (first {subset.shape[1]} predictors)")
        plt.tight_layout()
        fig.savefig(path)
        plt.close(fig)

        return path

    def plot_importance(
        self,
        importance: Sequence[Tuple[str, float]],
        out_dir: Path,
    ) -> Path:
        path = out_dir / "variable_importance.png"
        names = [n for n, _ in importance][::-1]
        scores = [s for _, s in importance][::-1]

        fig = plt.figure(figsize=(8, max(3, 0.3 * len(names))))
        plt.barh(names, scores)
        plt.title(f"Variable importance (top {len(names)})")
        plt.xlabel("Importance (0-100)")
        plt.tight_layout()
        fig.savefig(path)
        plt.close(fig)

        return path

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------
    def write_summary(
        self,
        *,
        out_dir: Path,
        run_id: str,
        schema: FeatureSchema,
        cleaning: CleaningReport,
        missing_threshold: float,
        n_train: int,
        n_valid: int,
        model: FittedModel,
        evaluation: EvaluationResult,
        predictions: pd.Series,
        charts: List[Path],
    ) -> Path:
        path = out_dir / "report.md"
        lines: List[str] = [f"# Exercise quality report: {run_id}", ""]

        # missingness
        mf = cleaning.missing_fraction
        lines += [
            "## Missingness",
            "",
            f"- raw columns: {cleaning.n_raw_columns}, rows: {cleaning.n_rows}",
            f"- columns with no missing values: {int((mf == 0).sum())}",
            f"- columns above threshold {missing_threshold}: "
            f"{int((mf > missing_threshold).sum())}",
            "",
        ]

        # cleaning
        lines += [
            "## Feature cleaning",
            "",
            f"- dropped (missingness): {len(cleaning.dropped_missingness)}",
            f"- dropped (identifier): {', '.join(cleaning.dropped_identifier) or '-'}",
            f"- dropped (near-zero variance): "
            f"{', '.join(cleaning.dropped_near_zero_variance) or '-'}",
            f"- predictors kept: {len(schema.features)}",
            f"- label: {schema.label}",
            "",
        ]

        # partition + cv
        scores = ", ".join(f"{s:.4f}" for s in model.cv_scores)
        lines += [
            "## Cross-validation",
            "",
            f"- train / validation rows: {n_train} / {n_valid}",
            f"- folds: {len(model.cv_scores)}",
            f"- fold accuracy: {scores}",
            f"- mean accuracy: {model.cv_mean:.4f} (std {model.cv_std:.4f})",
            f"- selected parameters: {model.best_params}",
            "",
        ]

        # validation
        lines += [
            "## Validation",
            "",
            "```",
            evaluation.confusion.to_string(),
            "```",
            "",
            f"- accuracy: {evaluation.accuracy:.4f}",
            f"- out-of-sample error: {evaluation.out_of_sample_error:.4f}",
            f"- kappa: {evaluation.kappa:.4f}",
            "",
            "## Variable importance",
            "",
            "| rank | predictor | importance |",
            "|---:|---|---:|",
        ]
        lines += [
            f"| {i} | {name} | {score:.2f} |"
            for i, (name, score) in enumerate(evaluation.importance, start=1)
        ]
        lines.append("")

        # predictions
        lines += ["## Test set predictions", ""]
        lines += [
            f"{i}. {label}" for i, label in enumerate(predictions.tolist(), start=1)
        ]
        lines.append("")

        lines += ["## Charts", ""]
        lines += [f"![{p.stem}]({p.name})" for p in charts]
        lines.append("")

        path.write_text("\n".join(lines), encoding="utf-8")
        return path


class PredictionWriteEngine:
    """
    PredictionWriteEngine (OPTIONAL)

    One text file per test row: problem_id_<i>.txt holding the label.
    """

    def write(self, predictions: pd.Series, out_dir: Path) -> List[Path]:
        out_dir.mkdir(parents=True, exist_ok=True)

        paths = []
        for i, label in enumerate(np.asarray(predictions).tolist(), start=1):
            path = out_dir / f"problem_id_{i}.txt"
            path.write_text(str(label), encoding="utf-8")
            paths.append(path)

        return paths
