#!filepath: exercise_quality/utils/path.py
from pathlib import Path
from typing import Optional

from exercise_quality.utils.logger import logs


class PathManager:
    """
    Project layout:

    <root>
     ├── exercise_quality/...
     ├── data/                  cached pml-*.csv
     └── runs/<run_id>/
            ├── reports/
            └── predictions/

    root defaults to the source checkout holding the package,
    or to the working directory when the package is installed.
    """

    _root: Optional[Path] = None

    # ---------------------------------------------------------
    # root detection
    # ---------------------------------------------------------
    @classmethod
    def detect_root(cls) -> Path:
        """
        Source checkout: this file lives at <root>/exercise_quality/utils/path.py,
        so root = parents[2] (the directory holding pyproject.toml).

        Installed package: parents[2] is site-packages, never a place for
        data or runs, so root = current working directory.
        """
        current = Path(__file__).resolve()
        checkout = current.parents[2]

        if (checkout / "pyproject.toml").exists():
            root = checkout
        else:
            root = Path.cwd().resolve()

        logs.debug(f"[PathManager] detect_root = {root}")
        return root

    @classmethod
    def root(cls) -> Path:
        if cls._root is None:
            cls._root = cls.detect_root()
        return cls._root

    @classmethod
    def set_root(cls, new_root: Path | str | None):
        if new_root is None:
            cls._root = None
        else:
            cls._root = Path(new_root).resolve()
        logs.debug(f"[PathManager] set_root = {cls._root}")

    @classmethod
    def resolve(cls, path: str | Path) -> Path:
        """Relative config paths are anchored at root."""
        p = Path(path).expanduser()
        return p if p.is_absolute() else cls.root() / p

    # ---------------------------------------------------------
    # data/
    # ---------------------------------------------------------
    @classmethod
    def data_dir(cls, configured: str | Path | None = None) -> Path:
        if configured:
            return cls.resolve(configured)
        return cls.root() / "data"

    # ---------------------------------------------------------
    # runs/
    # ---------------------------------------------------------
    @classmethod
    def runs_dir(cls) -> Path:
        return cls.root() / "runs"

    @classmethod
    def run_dir(cls, run_id: str) -> Path:
        return cls.runs_dir() / run_id
