#!filepath: exercise_quality/utils/filesystem.py
from pathlib import Path

from exercise_quality.utils.logger import logs


class FileSystem:
    """
    Filesystem helpers
    - create directories on demand
    - atomic writes (tmp file -> rename)
    - file sizes
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] created dir: {p}")
        return p

    @staticmethod
    def file_exists(path: str | Path) -> bool:
        return Path(path).exists()

    @staticmethod
    def get_file_size(path: str | Path) -> int:
        """
        File size in bytes (0 when missing).
        """
        p = Path(path)
        if not p.exists():
            return 0
        return p.stat().st_size

    @staticmethod
    def format_size(size_bytes: float) -> str:
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size_bytes < 1024:
                return f"{size_bytes:.2f} {unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f} PB"

    @staticmethod
    def safe_write(path: str | Path, data: bytes) -> None:
        """
        Atomic write, a half-written file never appears under `path`:
            1) write tmp file
            2) rename -> final name
        """
        path = Path(path)
        FileSystem.ensure_dir(path.parent)

        tmp_path = path.with_suffix(path.suffix + ".tmp")

        with open(tmp_path, "wb") as f:
            f.write(data)
            logs.debug(f"[FS] wrote tmp file: {tmp_path}")

        tmp_path.replace(path)
        logs.debug(f"[FS] atomic write done: {path}")
