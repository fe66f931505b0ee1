# exercise_quality/workflows/offline_training.py
from __future__ import annotations

from typing import Optional

from exercise_quality.config.app_config import AppConfig
from exercise_quality.observability.instrumentation import Instrumentation
from exercise_quality.training.engines.dataset_load_engine import DatasetLoadEngine
from exercise_quality.training.engines.feature_clean_engine import FeatureCleanEngine
from exercise_quality.training.engines.model import RandomForestTrainEngine
from exercise_quality.training.engines.model_evaluate_engine import ModelEvaluateEngine
from exercise_quality.training.engines.partition_engine import PartitionEngine
from exercise_quality.training.engines.predict_engine import PredictEngine
from exercise_quality.training.engines.report_engine import (
    PredictionWriteEngine,
    ReportEngine,
)
from exercise_quality.training.engines.schema_align_engine import SchemaAlignEngine
from exercise_quality.training.pipeline import TrainingPipeline
from exercise_quality.training.steps.dataset_load_step import DatasetLoadStep
from exercise_quality.training.steps.feature_clean_step import FeatureCleanStep
from exercise_quality.training.steps.model_evaluate_step import ModelEvaluateStep
from exercise_quality.training.steps.model_train_step import ModelTrainStep
from exercise_quality.training.steps.partition_step import PartitionStep
from exercise_quality.training.steps.predict_step import PredictStep
from exercise_quality.training.steps.prediction_write_step import PredictionWriteStep
from exercise_quality.training.steps.report_step import ReportStep
from exercise_quality.training.steps.schema_align_step import SchemaAlignStep
from exercise_quality.utils.path import PathManager


def build_offline_training(
    cfg: Optional[AppConfig] = None,
    *,
    inst: Optional[Instrumentation] = None,
) -> TrainingPipeline:
    """
    Offline Training Workflow (FINAL / FROZEN)
    """

    if cfg is None:
        cfg = AppConfig.load()
    pm = PathManager()
    inst = inst if inst is not None else Instrumentation()
    tcfg = cfg.training

    return TrainingPipeline(
        steps=[
            DatasetLoadStep(
                engine=DatasetLoadEngine(
                    backend=cfg.data.download_backend,
                    timeout=cfg.data.timeout,
                ),
                pm=pm,
                inst=inst,
            ),
            FeatureCleanStep(
                engine=FeatureCleanEngine(
                    missing_threshold=tcfg.missing_threshold,
                    id_prefix_columns=tcfg.id_prefix_columns,
                    freq_cut=tcfg.freq_cut,
                    unique_cut=tcfg.unique_cut,
                ),
                inst=inst,
            ),
            SchemaAlignStep(engine=SchemaAlignEngine(), inst=inst),
            PartitionStep(engine=PartitionEngine(), inst=inst),
            ModelTrainStep(engine=RandomForestTrainEngine(tcfg), inst=inst),
            ModelEvaluateStep(engine=ModelEvaluateEngine(), inst=inst),
            PredictStep(engine=PredictEngine(), inst=inst),
            ReportStep(engine=ReportEngine(), inst=inst),
            PredictionWriteStep(engine=PredictionWriteEngine(), inst=inst),
        ],
        pm=pm,
        inst=inst,
        cfg=cfg,
    )
