"""Structured logging primitives for cmdp."""

from .events import (
    build_run_log_path,
    log_event,
    setup_logging,
    summarize_text,
)
from .formatter import StructuredTextFormatter

__all__ = [
    "StructuredTextFormatter",
    "build_run_log_path",
    "log_event",
    "setup_logging",
    "summarize_text",
]
