"""Utility modules for BuildSource."""

from utils.estimate_logger import (
    log_training_start,
    log_training_complete,
    log_estimate_result,
    log_estimate_failed,
)
from utils.logging_config import configure_logging

__all__ = [
    "log_training_start",
    "log_training_complete",
    "log_estimate_result",
    "log_estimate_failed",
    "configure_logging",
]
