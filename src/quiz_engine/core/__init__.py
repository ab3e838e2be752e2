"""Shared configuration and logging helpers for quiz_engine commands."""

from __future__ import annotations

from .config import apply_toml, write_template
from .logging import JsonLogFormatter, configure_logger

__all__ = [
    "apply_toml",
    "write_template",
    "configure_logger",
    "JsonLogFormatter",
]
