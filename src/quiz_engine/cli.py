"""Command line entry point: ``quiz init|list|view|start``."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from .config import (
    CONFIG_FILENAME,
    CONFIG_TEMPLATE,
    ConfigOverrides,
    QuizEngineConfig,
    load_config,
)
from .console import InputProvider, render_catalog, render_quiz_list, run_quiz
from .core.config import write_template
from .core.logging import configure_logger
from .errors import EmptyPoolError, QuizConfigError, QuizLoadError
from .loader import display_name, index_path, load_document, load_index
from .models import QuizDocument
from .pool import flatten
from .session import QuizSession

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quiz",
        description="Take and browse JSON quizzes in the terminal",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument(
        "--config",
        type=Path,
        help=f"Path to a TOML config file (defaults to ./{CONFIG_FILENAME})",
    )
    p.add_argument("--bank-root", type=Path, help="Question bank directory")
    p.add_argument("--folder", help="Active bank folder, e.g. Lectura-5")
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror debug logs on stderr",
    )
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help=f"Create a {CONFIG_FILENAME} template")
    sub.add_parser("list", help="List quizzes in the active folder")

    sp_view = sub.add_parser(
        "view", help="Show every question of a quiz with its answer key"
    )
    sp_view.add_argument("name", help="Quiz file name or path")

    sp_start = sub.add_parser("start", help="Start a quiz session")
    sp_start.add_argument("name", help="Quiz file name or path")
    sp_start.add_argument(
        "--num",
        type=int,
        help="Number of questions (defaults to session.default_count)",
    )
    return p


def _cmd_init(args: argparse.Namespace, console: Console) -> int:
    path = (args.config or Path(CONFIG_FILENAME)).resolve()
    if not write_template(path, CONFIG_TEMPLATE):
        console.print(
            f"{CONFIG_FILENAME} already exists at {path}", markup=False
        )
        return 0
    console.print(f"Created template {path}", markup=False)
    return 0


def _cmd_list(config: QuizEngineConfig, console: Console) -> int:
    path = index_path(config.bank_root, config.folder, config.index_pattern)
    filenames = load_index(path)
    render_quiz_list(
        console, config.folder, filenames, config.count_choices
    )
    return 0 if filenames else 1


def _resolve_quiz_path(name: str, config: QuizEngineConfig) -> Path:
    candidate = Path(name).expanduser()
    if candidate.is_file():
        return candidate
    if not candidate.suffix:
        candidate = candidate.with_suffix(".json")
    return config.folder_path / candidate


def _load_named_document(
    name: str, config: QuizEngineConfig
) -> tuple[Path, QuizDocument]:
    path = _resolve_quiz_path(name, config)
    return path, load_document(path)


def _cmd_view(
    args: argparse.Namespace, config: QuizEngineConfig, console: Console
) -> int:
    path, document = _load_named_document(args.name, config)
    render_catalog(console, document, fallback_title=display_name(path.name))
    return 0


def _cmd_start(
    args: argparse.Namespace,
    config: QuizEngineConfig,
    console: Console,
    input_provider: Optional[InputProvider],
) -> int:
    requested = args.num if args.num is not None else config.default_count
    if requested <= 0:
        console.print("[red]Error: --num must be a positive integer.[/]")
        return 2
    path, document = _load_named_document(args.name, config)
    session = QuizSession()
    try:
        outcome = session.start(flatten(document), requested)
    except EmptyPoolError:
        console.print(
            "[red]No questions available. Please try another quiz.[/]"
        )
        return 1
    if outcome.was_clamped:
        console.print(
            f"[yellow]Only {outcome.effective_count} questions are "
            "available; all of them will be used.[/]"
        )
    title = document.title or display_name(path.name)
    console.print(
        Text.assemble(
            (title, "bold"), f": {outcome.effective_count} question(s)"
        )
    )
    provider = input_provider or (lambda: console.input("> "))
    run_quiz(session, console, provider)
    return 0


def run(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    input_provider: Optional[InputProvider] = None,
    env: Optional[dict[str, str]] = None,
) -> int:
    """Execute the CLI and return its exit code."""

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    if args.command == "init":
        return _cmd_init(args, console)

    overrides = ConfigOverrides(bank_root=args.bank_root, folder=args.folder)
    try:
        loaded = load_config(
            config_path=args.config, overrides=overrides, env=env
        )
    except QuizConfigError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/]")
        return 2
    config = loaded.config
    configure_logger(
        "quiz_engine",
        log_dir=config.log_dir,
        level=config.log_level,
        verbose=bool(args.verbose),
    )
    logger.debug(
        "Running command",
        extra={"command": args.command, "config_path": loaded.config_path},
    )

    try:
        if args.command == "list":
            return _cmd_list(config, console)
        if args.command == "view":
            return _cmd_view(args, config, console)
        if args.command == "start":
            return _cmd_start(args, config, console, input_provider)
    except QuizLoadError as exc:
        logger.error("Quiz load failed", extra={"error": str(exc)})
        console.print(f"[red]Error: {escape(str(exc))}[/]")
        return 2
    parser.print_help()  # pragma: no cover - argparse rejects other commands
    return 2  # pragma: no cover


def main(argv: Optional[Sequence[str]] = None) -> None:
    raise SystemExit(run(argv))
