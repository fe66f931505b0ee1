# exercise_quality/training/steps/predict_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.predict_engine import PredictEngine


class PredictStep(PipelineStep):
    """
    PredictStep (FINAL / FROZEN)

    Contract:
    - consumes ctx.model, ctx.aligned_test
    - produces ctx.predictions (one label per test row, input order)
    """

    stage = "predict"

    def __init__(self, *, engine: PredictEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        self.require(ctx, "model", "aligned_test")

        with self.timed():
            predictions = self.engine.predict(model=ctx.model, X=ctx.aligned_test)

        ctx.predictions = predictions

        logs.info(
            f"[PredictStep] {len(predictions)} prediction(s): "
            f"{' '.join(str(p) for p in predictions.tolist())}"
        )
        return ctx
