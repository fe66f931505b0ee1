# exercise_quality/training/engines/dataset_load_engine.py
from __future__ import annotations

import http.client
import subprocess
import urllib.request
from pathlib import Path
from typing import List, Sequence
from urllib.parse import urlparse

import pandas as pd

from exercise_quality import logs
from exercise_quality.config.data_config import DownloadBackend
from exercise_quality.utils.errors import DatasetFetchError
from exercise_quality.utils.filesystem import FileSystem


class DatasetLoadEngine:
    """
    DatasetLoadEngine (FINAL / FROZEN)

    Responsibility:
    - plan: url -> local cache file (named after the url)
    - fetch: skip if cached, otherwise download + atomic persist
    - parse: csv -> DataFrame, missing tokens -> NaN

    Error policy:
    - every network / file / csv failure -> DatasetFetchError (fatal)
    - no retry, the datasets are static
    """

    def __init__(
        self,
        *,
        backend: DownloadBackend = DownloadBackend.URLLIB,
        timeout: int = 60,
    ):
        self.backend = backend
        self.timeout = timeout

    # ======================================================================
    # Plan (pure)
    # ======================================================================
    @staticmethod
    def plan_downloads(
        *,
        urls: Sequence[str],
        data_dir: Path,
    ) -> List[dict]:
        """
        Returns:
            [{"url": ..., "filename": ..., "local_path": Path}, ...]
        """
        plans = []
        for url in urls:
            filename = Path(urlparse(url).path).name
            if not filename:
                raise ValueError(f"cannot derive a filename from url: {url!r}")

            plans.append(
                {
                    "url": url,
                    "filename": filename,
                    "local_path": Path(data_dir) / filename,
                }
            )
        return plans

    # ======================================================================
    # Fetch
    # ======================================================================
    def fetch(self, plan: dict) -> Path:
        local_path: Path = plan["local_path"]

        if FileSystem.file_exists(local_path):
            logs.info(
                f"[DatasetLoad] cache hit {local_path} "
                f"({FileSystem.format_size(FileSystem.get_file_size(local_path))})"
            )
            return local_path

        logs.info(f"[DatasetLoad] downloading {plan['url']} ({self.backend.value})")

        if self.backend == DownloadBackend.CURL:
            self._download_by_curl(plan["url"], local_path)
        else:
            self._download_by_urllib(plan["url"], local_path)

        logs.info(
            f"[DatasetLoad] saved {local_path} "
            f"({FileSystem.format_size(FileSystem.get_file_size(local_path))})"
        )
        return local_path

    def _download_by_urllib(self, url: str, local_path: Path) -> None:
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as resp:
                data = resp.read()
        except (OSError, http.client.HTTPException) as e:
            raise DatasetFetchError(f"download failed: {url}: {e}") from e

        if not data:
            raise DatasetFetchError(f"download returned no data: {url}")

        FileSystem.safe_write(local_path, data)

    def _download_by_curl(self, url: str, local_path: Path) -> None:
        FileSystem.ensure_dir(local_path.parent)
        tmp_path = local_path.with_suffix(local_path.suffix + ".tmp")

        cmd = [
            "curl",
            "--fail",
            "--location",
            "--silent",
            "--show-error",
            "--connect-timeout", str(self.timeout),
            "-o", str(tmp_path),
            url,
        ]

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout * 10,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            tmp_path.unlink(missing_ok=True)
            raise DatasetFetchError(f"curl failed: {url}: {e}") from e

        if result.returncode != 0:
            tmp_path.unlink(missing_ok=True)
            raise DatasetFetchError(
                f"curl exit={result.returncode} url={url}: {result.stderr.strip()}"
            )

        tmp_path.replace(local_path)

    # ======================================================================
    # Parse
    # ======================================================================
    @staticmethod
    def parse(path: Path, *, na_values: Sequence[str]) -> pd.DataFrame:
        """
        Only the configured tokens mean "missing"; pandas' own default
        NA spellings are switched off so the column types depend on
        exactly those tokens.
        """
        try:
            df = pd.read_csv(
                path,
                na_values=list(na_values),
                keep_default_na=False,
                low_memory=False,
            )
        except (
            pd.errors.ParserError,
            pd.errors.EmptyDataError,
            UnicodeDecodeError,
            OSError,
        ) as e:
            raise DatasetFetchError(f"cannot parse csv {path}: {e}") from e

        if df.empty:
            raise DatasetFetchError(f"csv has no rows: {path}")

        logs.debug(f"[DatasetLoad] parsed {path.name} shape={df.shape}")
        return df
