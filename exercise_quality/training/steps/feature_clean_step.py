# exercise_quality/training/steps/feature_clean_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.feature_clean_engine import FeatureCleanEngine


class FeatureCleanStep(PipelineStep):
    """
    FeatureCleanStep (FINAL / FROZEN)

    Contract:
    - consumes ctx.raw_train
    - produces ctx.schema, ctx.cleaning, ctx.clean_train
    """

    stage = "feature_clean"

    def __init__(self, *, engine: FeatureCleanEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        self.require(ctx, "raw_train")

        with self.timed():
            schema, report = self.engine.clean(
                ctx.raw_train,
                label=ctx.cfg.data.label_column,
            )
            ctx.clean_train = schema.project(ctx.raw_train)

        ctx.schema = schema
        ctx.cleaning = report

        logs.info(
            f"[FeatureCleanStep] columns {report.n_raw_columns} -> "
            f"{len(schema.features)} predictors + label | "
            f"missingness={len(report.dropped_missingness)} "
            f"identifier={len(report.dropped_identifier)} "
            f"nzv={len(report.dropped_near_zero_variance)}"
        )
        if report.dropped_near_zero_variance:
            logs.info(
                f"[FeatureCleanStep] near-zero variance: "
                f"{list(report.dropped_near_zero_variance)}"
            )
        self.inst.metrics.record("n_features", len(schema.features))

        return ctx
