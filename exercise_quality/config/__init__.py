from .app_config import AppConfig
from .data_config import DataConfig, DownloadBackend
from .log_config import LogConfig
from .training_config import TrainingConfig

__all__ = [
    "AppConfig",
    "DataConfig",
    "DownloadBackend",
    "LogConfig",
    "TrainingConfig",
]
