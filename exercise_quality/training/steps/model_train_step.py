# exercise_quality/training/steps/model_train_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.model_train_engine import ModelTrainEngine


class ModelTrainStep(PipelineStep):
    """
    ModelTrainStep (BATCH / FINAL)

    Contract:
    - consumes ctx.train_X / ctx.train_y
    - produces ctx.model (FittedModel)
    """

    stage = "model_train"

    def __init__(self, *, engine: ModelTrainEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        self.require(ctx, "train_X", "train_y")
        seed = ctx.cfg.training.seed

        with self.timed():
            model = self.engine.train(
                X=ctx.train_X,
                y=ctx.train_y,
                seed=seed,
            )

        ctx.model = model
        ctx.metrics["cv_accuracy_mean"] = model.cv_mean
        ctx.metrics["cv_accuracy_std"] = model.cv_std

        logs.info(
            f"[ModelTrainStep] cv_scores={[round(s, 4) for s in model.cv_scores]} "
            f"mean={model.cv_mean:.4f} std={model.cv_std:.4f}"
        )
        self.inst.metrics.record("cv_accuracy_mean", round(model.cv_mean, 6))

        return ctx
