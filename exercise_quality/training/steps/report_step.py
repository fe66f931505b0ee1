# exercise_quality/training/steps/report_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.report_engine import ReportEngine
from exercise_quality.utils.filesystem import FileSystem


class ReportStep(PipelineStep):
    """
    ReportStep (FINAL / FROZEN)

    Outputs (<run_dir>/reports):
    - class_distribution.png
    - missingness.png
    - correlation.png
    - variable_importance.png
    - report.md
    """

    stage = "training_report"

    def __init__(self, *, engine: ReportEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        self.require(
            ctx, "schema", "cleaning", "clean_train", "train_X",
            "model", "evaluation", "predictions",
        )
        cfg = ctx.cfg.training
        out_dir = FileSystem.ensure_dir(ctx.run_dir / "reports")

        with self.timed():
            charts = [
                self.engine.plot_class_distribution(ctx.clean_train[ctx.schema.label], out_dir),
                self.engine.plot_missingness(
                    ctx.cleaning.missing_fraction, cfg.missing_threshold, out_dir
                ),
                self.engine.plot_correlation(ctx.train_X, cfg.correlation_features, out_dir),
                self.engine.plot_importance(ctx.evaluation.importance, out_dir),
            ]

            ctx.report_path = self.engine.write_summary(
                out_dir=out_dir,
                run_id=ctx.run_id,
                schema=ctx.schema,
                cleaning=ctx.cleaning,
                missing_threshold=cfg.missing_threshold,
                n_train=len(ctx.train_X),
                n_valid=len(ctx.valid_X),
                model=ctx.model,
                evaluation=ctx.evaluation,
                predictions=ctx.predictions,
                charts=charts,
            )

        logs.info(f"[ReportStep] saved {ctx.report_path}")
        return ctx
