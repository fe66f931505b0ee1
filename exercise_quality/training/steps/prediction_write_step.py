# exercise_quality/training/steps/prediction_write_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.report_engine import PredictionWriteEngine


class PredictionWriteStep(PipelineStep):
    """
    PredictionWriteStep (OPTIONAL)

    Disabled unless cfg.training.write_prediction_files is true.
    """

    stage = "prediction_write"

    def __init__(self, *, engine: PredictionWriteEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        if not ctx.cfg.training.write_prediction_files:
            logs.info("[PredictionWriteStep] disabled, skip")
            return ctx

        self.require(ctx, "predictions")

        with self.timed():
            ctx.prediction_files = self.engine.write(
                ctx.predictions, ctx.run_dir / "predictions"
            )

        logs.info(
            f"[PredictionWriteStep] wrote {len(ctx.prediction_files)} file(s) "
            f"to {ctx.run_dir / 'predictions'}"
        )
        return ctx
