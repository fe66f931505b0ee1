# exercise_quality/training/steps/schema_align_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.schema_align_engine import SchemaAlignEngine


class SchemaAlignStep(PipelineStep):
    """
    SchemaAlignStep (FINAL / FROZEN)

    Contract:
    - consumes ctx.raw_test, ctx.schema
    - produces ctx.aligned_test, ctx.missing_test_features
    - missing features are NOT an error here; PredictStep fails on them
    """

    stage = "schema_align"

    def __init__(self, *, engine: SchemaAlignEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        self.require(ctx, "raw_test", "schema")

        with self.timed():
            aligned, missing = self.engine.align(ctx.raw_test, ctx.schema)

        ctx.aligned_test = aligned
        ctx.missing_test_features = missing

        if missing:
            logs.warning(
                f"[SchemaAlignStep] test data lacks {len(missing)} model feature(s): {missing}"
            )

        logs.info(
            f"[SchemaAlignStep] test columns {ctx.raw_test.shape[1]} -> {aligned.shape[1]}"
        )
        return ctx
