# exercise_quality/training/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from exercise_quality.training.schema import CleaningReport, FeatureSchema


@dataclass
class TrainingContext:
    """
    TrainingContext (FINAL / FROZEN)

    Semantics:
    - One context == one training run
    - run_id is immutable and mandatory
    - every slot is written by exactly one step
    """

    # -------------------------
    # Identity (FROZEN)
    # -------------------------
    run_id: str

    # -------------------------
    # Static bindings
    # -------------------------
    cfg: Any
    inst: Any
    run_dir: Path

    # -------------------------
    # DatasetLoadStep
    # -------------------------
    raw_train: Optional[pd.DataFrame] = None
    raw_test: Optional[pd.DataFrame] = None

    # -------------------------
    # FeatureCleanStep
    # -------------------------
    schema: Optional[FeatureSchema] = None
    cleaning: Optional[CleaningReport] = None
    clean_train: Optional[pd.DataFrame] = None

    # -------------------------
    # SchemaAlignStep
    # -------------------------
    aligned_test: Optional[pd.DataFrame] = None
    missing_test_features: List[str] = field(default_factory=list)

    # -------------------------
    # PartitionStep
    # -------------------------
    train_X: Optional[pd.DataFrame] = None
    train_y: Optional[pd.Series] = None
    valid_X: Optional[pd.DataFrame] = None
    valid_y: Optional[pd.Series] = None

    # -------------------------
    # ModelTrainStep / ModelEvaluateStep / PredictStep
    # -------------------------
    model: Any = None
    evaluation: Any = None
    predictions: Optional[pd.Series] = None

    # -------------------------
    # Outputs
    # -------------------------
    report_path: Optional[Path] = None
    prediction_files: List[Path] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
