"""TOML reading and template writing for ``quiz_engine.toml``."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Mapping, MutableMapping

from ..errors import QuizConfigError

__all__ = ["apply_toml", "write_template"]


def apply_toml(table: MutableMapping[str, Any], path: Path) -> None:
    """Overlay the TOML file at ``path`` onto the defaults in ``table``.

    Keys that have no default are rejected so typos surface early.
    """

    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise QuizConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise QuizConfigError(f"{path} is not valid TOML: {exc}") from exc
    _overlay(table, data, prefix="")


def _overlay(
    base: MutableMapping[str, Any], override: Mapping[str, Any], *, prefix: str
) -> None:
    for key, value in override.items():
        dotted = prefix + key
        if key not in base:
            raise QuizConfigError(f"Unknown configuration key '{dotted}'.")
        if isinstance(base[key], MutableMapping):
            if not isinstance(value, Mapping):
                raise QuizConfigError(f"'{dotted}' must be a table.")
            _overlay(base[key], value, prefix=dotted + ".")
        else:
            base[key] = value


def write_template(path: Path, template: str) -> bool:
    """Create ``path`` from ``template``; False when the file already exists."""

    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template, encoding="utf-8")
    return True
