"""Rich-powered terminal front end for quiz sessions and bank browsing.

Everything here renders plain data produced by :mod:`quiz_engine.session`
and :mod:`quiz_engine.loader`; answer checking and scoring stay in the
engine. The session loop reads commands from an injectable provider so it
can be driven by scripted input in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .loader import TYPE_LABELS, count_question_types, display_name
from .models import Question, QuestionType, QuizDocument, ValidationResult
from .pool import flatten
from .session import QuizResults, QuizSession, SessionAnswer

InputProvider = Callable[[], str]
ExitAction = Literal["completed", "quit"]


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: Literal["next", "prev", "quit", "answer"]
    value: Optional[str] = None


@dataclass(frozen=True)
class ConsoleRunResult:
    exit_action: ExitAction
    results: Optional[QuizResults] = None


def parse_session_command(
    raw: Optional[str], question: Question
) -> Optional[SessionCommand]:
    """Parse console input for ``question`` into a command.

    Navigation words win over answers. For multiple-choice questions only a
    listed option letter is an answer; anything else is rejected. A
    multiple-choice question without options takes the typed text as is.
    """

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in {"n", "next"}:
        return SessionCommand("next")
    if lowered in {"p", "prev", "previous"}:
        return SessionCommand("prev")
    if lowered in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if question.type is QuestionType.MULTIPLE_CHOICE and question.options:
        for key in question.options:
            if key.lower() == lowered:
                return SessionCommand("answer", key)
        return None
    return SessionCommand("answer", text)


def run_quiz(
    session: QuizSession,
    console: Console,
    input_provider: InputProvider,
) -> ConsoleRunResult:
    """Drive a started ``session`` until it completes or the user quits."""

    exit_action: ExitAction = "quit"
    while True:
        _render_question(console, session)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            session.exit()
            break
        command = parse_session_command(raw, session.current_question)
        if command is None:
            console.print("[red]Unrecognized command or option. Try again.[/]")
            continue
        outcome = _apply_command(command, session, console)
        if outcome:
            exit_action = outcome
            break

    if exit_action != "completed":
        return ConsoleRunResult(exit_action)
    results = session.compute_results()
    render_summary(console, session, results)
    return ConsoleRunResult(exit_action, results)


def _apply_command(
    command: SessionCommand,
    session: QuizSession,
    console: Console,
) -> Optional[ExitAction]:
    if command.type == "answer":
        if session.current_answer is not None:
            console.print("[yellow]This question was already answered.[/]")
            return None
        result = session.record_answer(session.current_index, command.value)
        if result is not None:
            render_feedback(console, session.current_question, result)
        return None
    if command.type == "next":
        if session.current_answer is None:
            console.print("[yellow]Answer the question before moving on.[/]")
            return None
        if session.advance().completed:
            return "completed"
        return None
    if command.type == "prev":
        if session.current_index == 0:
            console.print("[dim]Already at the first question.[/]")
            return None
        session.retreat()
        return None
    if command.type == "quit":
        console.print(
            "\n[bold yellow]Leaving the quiz. Progress was discarded.[/]"
        )
        session.exit()
        return "quit"
    return None


def _render_question(console: Console, session: QuizSession) -> None:
    question = session.current_question
    answer = session.current_answer
    header = Text.assemble(
        (f"Question {session.current_index + 1}", "bold cyan"),
        (f" / {session.total_questions}", "dim"),
        (f"  {TYPE_LABELS[question.type]}", "magenta"),
    )
    console.print()
    console.rule(header)
    console.print(Text(question.text, style="bold"))

    if question.type is QuestionType.MULTIPLE_CHOICE and question.options:
        console.print(_options_table(question, answer))
        hint = "options [" + ", ".join(question.options) + "]"
    elif question.type is QuestionType.TRUE_FALSE:
        hint = "type verdadero or falso"
    else:
        hint = "type your answer"

    if answer is not None:
        render_feedback(console, question, answer.result)
        hint = "already answered"
    console.print(
        Text(
            f"Answered {session.answered_count()}/{session.total_questions}"
            f" | {hint}, n (next), p (prev), quit",
            style="dim",
        )
    )


def _options_table(
    question: Question, answer: Optional[SessionAnswer]
) -> Table:
    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("Key", justify="center", style="cyan")
    table.add_column("Option")
    selected = answer.raw_text if answer is not None else None
    for key, text in question.options.items():
        row = Text(text)
        if answer is not None and key == question.correct_answer:
            row.stylize("bold green")
        elif key == selected:
            row.stylize("bold red")
        marker = "•" if key == selected else " "
        table.add_row(Text(key), Text(marker + " ") + row)
    return table


def render_feedback(
    console: Console, question: Question, result: ValidationResult
) -> None:
    if result.is_keyword_result:
        _render_keyword_feedback(console, question, result)
    elif result.expected_answer is None:
        console.print(
            "[red]This question could not be checked "
            "(unrecognised question type).[/]"
        )
    elif result.is_correct:
        console.print("[bold green]✔ Correct! Well done.[/]")
    else:
        console.print(
            Text.assemble(
                ("✗ Incorrect. ", "bold red"),
                "The correct answer is: ",
                (result.expected_answer, "bold"),
            )
        )
    if question.reference:
        console.print(Text(f"Reference: {question.reference}", style="dim"))


def _render_keyword_feedback(
    console: Console, question: Question, result: ValidationResult
) -> None:
    spec = question.keyword_spec
    threshold = spec.min_threshold if spec is not None else 0
    verdict = (
        Text("✔ Correct!", style="bold green")
        if result.is_correct
        else Text("✗ Not enough key ideas.", style="bold red")
    )
    console.print(verdict)
    table = Table(box=box.SIMPLE, expand=False)
    table.add_column("Keyword")
    table.add_column("Weight", justify="right")
    table.add_column("Found", justify="center")
    for hit in result.matched_words:
        table.add_row(Text(hit.word), _format_number(hit.weight), "✅")
    for hit in result.missing_words:
        table.add_row(Text(hit.word), _format_number(hit.weight), "❌")
    console.print(table)
    console.print(
        f"Score {_format_number(result.score_obtained or 0)}"
        f"/{_format_number(result.score_total or 0)}"
        f" ({(result.ratio or 0) * 100:.0f}%, "
        f"needed {threshold * 100:.0f}%)"
    )


def render_summary(
    console: Console, session: QuizSession, results: QuizResults
) -> None:
    console.print()
    console.rule(Text("Quiz Results", style="bold magenta"))

    overview = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Correct", str(results.correct_count))
    overview.add_row("Incorrect", str(results.incorrect_count))
    overview.add_row("Score", f"{results.percentage}%")
    console.print(overview)
    console.print(Text(results.message, style="bold"))

    review = Table(title="Review", box=box.SIMPLE, expand=True)
    review.add_column("#", justify="right")
    review.add_column("Question", overflow="fold")
    review.add_column("Your answer", overflow="fold")
    review.add_column("Expected", overflow="fold")
    review.add_column("Result", justify="center")
    for item in session.review():
        your = item.answer.raw_text if item.answer is not None else ""
        review.add_row(
            str(item.number),
            Text(item.question.text),
            Text(your or "-"),
            Text(_expected_label(item.question)),
            "✅" if item.is_correct else "❌",
        )
    console.print(review)


def render_quiz_list(
    console: Console,
    folder: str,
    filenames: Sequence[str],
    count_choices: Sequence[int] = (),
) -> None:
    if not filenames:
        console.print(
            Panel(
                Text(f"No quizzes available in {folder}."),
                title="Quizzes",
                border_style="yellow",
            )
        )
        return
    table = Table(
        title=Text(f"{folder}: {len(filenames)} quiz(zes)"),
        box=box.SIMPLE,
    )
    table.add_column("#", justify="right")
    table.add_column("Quiz")
    table.add_column("File", style="dim")
    for idx, name in enumerate(filenames, start=1):
        table.add_row(str(idx), Text(display_name(name)), Text(name))
    console.print(table)
    if count_choices:
        sizes = ", ".join(str(n) for n in count_choices)
        console.print(
            Text(
                "Start one with: quiz start NAME --num N "
                f"(suggested: {sizes})",
                style="dim",
            )
        )


def render_catalog(
    console: Console, document: QuizDocument, fallback_title: str = ""
) -> None:
    """Print every question of ``document`` with its answer key."""

    console.print(
        Panel(
            Text(document.description or "Study quiz"),
            title=Text(document.title or fallback_title or "Quiz"),
            border_style="magenta",
        )
    )
    questions = flatten(document)
    if not questions:
        console.print("[dim]This quiz has no questions.[/]")
        return
    for number, question in enumerate(questions, start=1):
        console.print()
        console.rule(
            Text.assemble(
                (f"Question {number}", "bold cyan"),
                (f"  {TYPE_LABELS[question.type]}", "magenta"),
            )
        )
        console.print(Text(question.text, style="bold"))
        _render_answer_key(console, question)
        console.print(
            Text(
                f"Reference: {question.reference or 'not specified'}",
                style="dim",
            )
        )

    stats = Table(title="Question types", box=box.SIMPLE)
    stats.add_column("Type")
    stats.add_column("Count", justify="right")
    stats.add_row("Total", str(len(questions)), style="bold")
    for qtype, count in count_question_types(questions).items():
        stats.add_row(TYPE_LABELS[qtype], str(count))
    console.print(stats)


def _render_answer_key(console: Console, question: Question) -> None:
    if question.type is QuestionType.MULTIPLE_CHOICE:
        for key, text in question.options.items():
            mark = "✅" if key == question.correct_answer else "⚪"
            console.print(
                f"  {mark} {key}) {text}", highlight=False, markup=False
            )
        _print_correct_answer(console, question)
    elif question.type in (QuestionType.SINGLE_WORD, QuestionType.TRUE_FALSE):
        _print_correct_answer(console, question)
        if question.synonyms:
            console.print(
                "Accepted synonyms: " + ", ".join(question.synonyms),
                markup=False,
            )
    elif question.type.uses_keywords and question.keyword_spec is not None:
        spec = question.keyword_spec
        table = Table(box=box.SIMPLE, expand=False)
        table.add_column("Keyword")
        table.add_column("Weight", justify="right")
        table.add_column("Synonyms")
        for idx, word in enumerate(spec.words):
            table.add_row(
                Text(word),
                _format_number(spec.weight_for(idx)),
                Text(", ".join(spec.synonyms_for(word))),
            )
        console.print(table)
        console.print(f"Pass threshold: {spec.min_threshold * 100:.0f}%")
    else:
        console.print("[red]Unrecognised question type.[/]")


def _print_correct_answer(console: Console, question: Question) -> None:
    console.print(
        Text.assemble(
            "Correct answer: ", (question.correct_answer or "-", "bold")
        )
    )


def _expected_label(question: Question) -> str:
    if question.type.uses_keywords and question.keyword_spec is not None:
        return ", ".join(question.keyword_spec.words)
    return question.correct_answer or "-"


def _format_number(value: float) -> str:
    return f"{value:g}"
