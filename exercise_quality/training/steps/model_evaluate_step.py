# exercise_quality/training/steps/model_evaluate_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.model_evaluate_engine import ModelEvaluateEngine


class ModelEvaluateStep(PipelineStep):
    """
    ModelEvaluateStep (FINAL / FROZEN)

    Responsibility:
    - Held-out evaluation of ctx.model on the validation partition
    - Does NOT modify the model
    """

    stage = "model_evaluate"

    def __init__(self, *, engine: ModelEvaluateEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        self.require(ctx, "model", "valid_X", "valid_y")

        with self.timed():
            result = self.engine.evaluate(
                model=ctx.model,
                X=ctx.valid_X,
                y=ctx.valid_y,
                top_n=ctx.cfg.training.top_n_importance,
            )

        ctx.evaluation = result
        ctx.metrics["accuracy"] = result.accuracy
        ctx.metrics["out_of_sample_error"] = result.out_of_sample_error
        ctx.metrics["kappa"] = result.kappa

        logs.info(
            f"[ModelEvaluateStep] n={result.n_samples} "
            f"accuracy={result.accuracy:.4f} "
            f"error={result.out_of_sample_error:.4f} "
            f"kappa={result.kappa:.4f}"
        )
        logs.info(f"[ModelEvaluateStep] confusion matrix\n{result.confusion.to_string()}")
        self.inst.metrics.record("accuracy", round(result.accuracy, 6))

        return ctx
