#!filepath: exercise_quality/cli.py
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich import print

from exercise_quality import __version__, init_logging
from exercise_quality.config.app_config import AppConfig
from exercise_quality.utils.errors import PipelineError, UserInputError
from exercise_quality.workflows.offline_training import build_offline_training

app = typer.Typer(help="Exercise Quality Training Pipeline CLI")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML config (default: packaged base.yml)"
    ),
    run_id: Optional[str] = typer.Option(
        None, "--run-id", help="Run directory name (default: timestamp)"
    ),
):
    """
    Download (or reuse) the data, clean, train, evaluate, predict, report.
    """
    try:
        if config is not None and not config.exists():
            raise UserInputError(f"config file not found: {config}")

        cfg = AppConfig.load(str(config) if config is not None else None)
        init_logging(cfg.log)

        run_id = run_id or datetime.now().strftime("%Y%m%d-%H%M%S")
        print(f"[green]Running training pipeline run_id={run_id}[/green]")

        ctx = build_offline_training(cfg).run(run_id)

    except (PipelineError, UserInputError) as e:
        print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(code=1)

    print(
        f"[blue]accuracy={ctx.evaluation.accuracy:.4f} "
        f"out-of-sample error={ctx.evaluation.out_of_sample_error:.4f}[/blue]"
    )
    print(f"predictions: {' '.join(str(p) for p in ctx.predictions.tolist())}")
    print(f"report: {ctx.report_path}")


if __name__ == "__main__":
    app()

# python -m exercise_quality.cli run
