# exercise_quality/training/steps/dataset_load_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.dataset_load_engine import DatasetLoadEngine
from exercise_quality.utils.errors import SchemaMismatchError
from exercise_quality.utils.path import PathManager


class DatasetLoadStep(PipelineStep):
    """
    DatasetLoadStep (Source Step / FINAL)

    Semantics:
      upstream : remote csv (https://...)
      output   : ctx.raw_train, ctx.raw_test

    Error policy:
      - every failure is fatal (DatasetFetchError)
    """

    stage = "dataset_load"

    def __init__(
        self,
        *,
        engine: DatasetLoadEngine,
        pm: PathManager,
        inst=None,
    ) -> None:
        super().__init__(inst=inst)
        self.engine = engine
        self.pm = pm

    def run(self, ctx: TrainingContext) -> TrainingContext:
        cfg = ctx.cfg.data

        with self.timed():
            train_plan, test_plan = self.engine.plan_downloads(
                urls=[cfg.train_url, cfg.test_url],
                data_dir=self.pm.data_dir(cfg.data_dir),
            )

            raw_train = self.engine.parse(
                self.engine.fetch(train_plan), na_values=cfg.na_values
            )
            raw_test = self.engine.parse(
                self.engine.fetch(test_plan), na_values=cfg.na_values
            )

        if cfg.label_column not in raw_train.columns:
            raise SchemaMismatchError(
                f"label column {cfg.label_column!r} not found in {train_plan['filename']}"
            )

        ctx.raw_train = raw_train
        ctx.raw_test = raw_test

        logs.info(
            f"[DatasetLoadStep] train={raw_train.shape} test={raw_test.shape} "
            f"label={cfg.label_column}"
        )
        self.inst.metrics.record("raw_train_rows", len(raw_train))
        self.inst.metrics.record("raw_test_rows", len(raw_test))

        return ctx
