"""Configuration loader for the quiz command line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, MutableMapping, Optional, Sequence

from .core.config import apply_toml
from .errors import QuizConfigError

__all__ = [
    "CONFIG_FILENAME",
    "CONFIG_ENV",
    "ENV_PREFIX",
    "CONFIG_TEMPLATE",
    "QuizEngineConfig",
    "ConfigOverrides",
    "LoadResult",
    "load_config",
]

CONFIG_FILENAME = "quiz_engine.toml"
CONFIG_ENV = "QUIZ_ENGINE_CONFIG"
ENV_PREFIX = "QUIZ_ENGINE_"

_DEFAULT_BANK_ROOT = "bd-preguntas"
_DEFAULT_FOLDER = "Lectura-6"
_DEFAULT_INDEX_PATTERN = "index{numero}.json"
_DEFAULT_COUNT = 10
_DEFAULT_COUNT_CHOICES: tuple[int, ...] = (10, 20, 30, 50)
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_LOG_DIR = ".quiz_engine/logs"
_CHOICES_LITERAL = ", ".join(str(n) for n in _DEFAULT_COUNT_CHOICES)

CONFIG_TEMPLATE = f"""\
# quiz_engine configuration

[bank]
# Directory holding one sub-folder per question bank
root = "{_DEFAULT_BANK_ROOT}"
# Active bank folder; its first number fills {{numero}} in index_pattern
folder = "{_DEFAULT_FOLDER}"
index_pattern = "{_DEFAULT_INDEX_PATTERN}"

[session]
default_count = {_DEFAULT_COUNT}
count_choices = [{_CHOICES_LITERAL}]

[logging]
level = "{_DEFAULT_LOG_LEVEL}"
dir = "{_DEFAULT_LOG_DIR}"
"""


@dataclass(frozen=True)
class QuizEngineConfig:
    bank_root: Path
    folder: str
    index_pattern: str
    default_count: int
    count_choices: tuple[int, ...]
    log_level: str
    log_dir: Path

    @property
    def folder_path(self) -> Path:
        return self.bank_root / self.folder


@dataclass(frozen=True)
class ConfigOverrides:
    """Values supplied on the command line; ``None`` means not given."""

    bank_root: Optional[Path] = None
    folder: Optional[str] = None
    default_count: Optional[int] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: QuizEngineConfig
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> LoadResult:
    """Resolve configuration with precedence CLI > env > TOML > defaults.

    The TOML file is optional unless it was named explicitly, either by
    ``config_path`` or the ``QUIZ_ENGINE_CONFIG`` variable.
    """

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env
    base_dir = Path(cwd) if cwd is not None else Path.cwd()

    requested = _resolve_config_path(config_path, env_map, base_dir)
    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        apply_toml(table, requested)
        loaded_path = requested
    elif config_path is not None or env_map.get(CONFIG_ENV, "").strip():
        raise QuizConfigError(f"Config file not found: {requested}")

    bank = table["bank"]
    session = table["session"]
    logging_table = table["logging"]

    bank_root = _pick_first(
        overrides.bank_root,
        _env_value(env_map, "BANK_ROOT"),
        bank["root"],
    )
    folder = _pick_first(
        overrides.folder,
        _env_value(env_map, "FOLDER"),
        bank["folder"],
    )
    default_count = _coerce_count(
        _pick_first(
            overrides.default_count,
            _env_value(env_map, "DEFAULT_COUNT"),
            session["default_count"],
        ),
        "session.default_count",
    )
    log_level = str(
        _pick_first(
            overrides.log_level,
            _env_value(env_map, "LOG_LEVEL"),
            logging_table["level"],
        )
    ).upper()

    config = QuizEngineConfig(
        bank_root=_resolve_path(bank_root, base_dir),
        folder=_require_text(folder, "bank.folder"),
        index_pattern=_require_text(bank["index_pattern"], "bank.index_pattern"),
        default_count=default_count,
        count_choices=_coerce_choices(session["count_choices"]),
        log_level=log_level,
        log_dir=_resolve_path(
            _pick_first(_env_value(env_map, "LOG_DIR"), logging_table["dir"]),
            base_dir,
        ),
    )
    return LoadResult(config=config, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "bank": {
            "root": _DEFAULT_BANK_ROOT,
            "folder": _DEFAULT_FOLDER,
            "index_pattern": _DEFAULT_INDEX_PATTERN,
        },
        "session": {
            "default_count": _DEFAULT_COUNT,
            "count_choices": list(_DEFAULT_COUNT_CHOICES),
        },
        "logging": {"level": _DEFAULT_LOG_LEVEL, "dir": _DEFAULT_LOG_DIR},
    }


def _resolve_config_path(
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    base_dir: Path,
) -> Path:
    if config_path is not None:
        return Path(config_path).expanduser()
    env_candidate = env_map.get(CONFIG_ENV, "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return base_dir / CONFIG_FILENAME


def _env_value(env_map: Mapping[str, str], key: str) -> Optional[str]:
    value = env_map.get(f"{ENV_PREFIX}{key}")
    if value is None or not value.strip():
        return None
    return value.strip()


def _pick_first(*values: object) -> object:
    for value in values:
        if value is not None:
            return value
    return None


def _resolve_path(value: object, base_dir: Path) -> Path:
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else base_dir / path


def _require_text(value: object, key: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise QuizConfigError(f"'{key}' must be a non-empty string.")
    return text


def _coerce_count(value: object, key: str) -> int:
    if isinstance(value, bool):
        raise QuizConfigError(f"'{key}' must be a positive integer.")
    try:
        count = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise QuizConfigError(f"'{key}' must be a positive integer.") from exc
    if count <= 0:
        raise QuizConfigError(f"'{key}' must be a positive integer.")
    return count


def _coerce_choices(value: object) -> tuple[int, ...]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        raise QuizConfigError("'session.count_choices' must be a list.")
    return tuple(
        _coerce_count(item, "session.count_choices") for item in value
    )
