from __future__ import annotations

from fixtures import identity_random
from rich.console import Console

from quiz_engine.console import (
    SessionCommand,
    parse_session_command,
    render_catalog,
    render_quiz_list,
    run_quiz,
)
from quiz_engine.models import Question, QuestionType, parse_document
from quiz_engine.session import QuizSession, SessionState


def make_provider(commands: list[str]):
    iterator = iter(commands)

    def _provider() -> str:
        return next(iterator)

    return _provider


def make_console() -> Console:
    return Console(record=True, width=120, force_terminal=True)


def _started(pool, count: int) -> QuizSession:
    session = QuizSession(rng=identity_random())
    session.start(pool, count)
    return session


def test_parse_session_command_variants() -> None:
    choice = Question(text="?", options={"a": "x", "b": "y"}, correct_answer="a")
    free = Question(text="?", type=QuestionType.SINGLE_WORD, correct_answer="Sol")

    assert parse_session_command("B", choice) == SessionCommand("answer", "b")
    assert parse_session_command("z", choice) is None
    assert parse_session_command("  Next ", choice) == SessionCommand("next")
    assert parse_session_command("p", free) == SessionCommand("prev")
    assert parse_session_command("quit", free) == SessionCommand("quit")
    assert parse_session_command(" astro rey ", free) == SessionCommand(
        "answer", "astro rey"
    )
    assert parse_session_command(None, free) is None
    assert parse_session_command("   ", free) is None


def test_run_quiz_completes_and_shows_summary(sample_pool) -> None:
    console = make_console()
    session = _started(sample_pool, 5)
    provider = make_provider(
        [
            "b",
            "n",
            "Astro Rey",
            "n",
            "verdadero",
            "n",
            "la gravedad define la órbita",
            "n",
            "respiración",
            "n",
        ]
    )

    result = run_quiz(session, console, provider)

    assert result.exit_action == "completed"
    assert result.results is not None
    assert result.results.correct_count == 3
    assert result.results.percentage == 60
    output = console.export_text()
    assert "Quiz Results" in output
    assert "Good attempt" in output
    assert "The correct answer is: falso" in output
    assert "fotosíntesis" in output
    assert "Reference: Capítulo 1, p. 4" in output


def test_run_quiz_requires_answer_before_next(sample_pool) -> None:
    console = make_console()
    session = _started(sample_pool, 1)

    result = run_quiz(session, console, make_provider(["n", "x", "b", "c", "n"]))

    output = console.export_text()
    assert "Answer the question before moving on" in output
    assert "Unrecognized command" in output
    assert "already answered" in output
    assert result.results.correct_count == 1


def test_run_quiz_navigates_back(sample_pool) -> None:
    console = make_console()
    session = _started(sample_pool, 2)

    result = run_quiz(
        session,
        console,
        make_provider(["p", "a", "n", "p", "n", "sol", "n"]),
    )

    assert "Already at the first question" in console.export_text()
    assert result.exit_action == "completed"
    assert result.results.correct_count == 1


def test_run_quiz_quit_discards_progress(sample_pool) -> None:
    console = make_console()
    session = _started(sample_pool, 3)

    result = run_quiz(session, console, make_provider(["b", "quit"]))

    assert result.exit_action == "quit"
    assert result.results is None
    assert session.state is SessionState.NOT_STARTED
    assert "Progress was discarded" in console.export_text()


def test_run_quiz_handles_end_of_input(sample_pool) -> None:
    console = make_console()
    session = _started(sample_pool, 2)

    result = run_quiz(session, console, iter(()).__next__)

    assert result.exit_action == "quit"
    assert "Session interrupted" in console.export_text()


def test_keyword_feedback_lists_matches(sample_pool) -> None:
    console = make_console()
    session = _started(sample_pool[3:], 1)

    run_quiz(session, console, make_provider(["la masa", "quit"]))

    output = console.export_text()
    assert "Not enough key ideas" in output
    assert "gravedad" in output
    assert "Score 1/5 (20%, needed 60%)" in output


def test_unknown_type_feedback() -> None:
    console = make_console()
    pool = [Question(text="Ensayo", type=QuestionType.UNKNOWN, raw_type="essay")]
    session = _started(pool, 1)

    result = run_quiz(session, console, make_provider(["algo", "n"]))

    assert "could not be checked" in console.export_text()
    assert result.results.correct_count == 0


def test_render_catalog_shows_answer_keys(sample_doc) -> None:
    console = make_console()

    render_catalog(console, parse_document(sample_doc))

    output = console.export_text()
    assert "Sistema Solar" in output
    assert "Repaso de la lectura 5" in output
    assert "Accepted synonyms: astro rey" in output
    assert "trayectoria" in output
    assert "Pass threshold: 60%" in output
    assert "Question types" in output
    assert "Fill in the blank" in output


def test_render_catalog_empty_document() -> None:
    console = make_console()

    render_catalog(console, parse_document({}), fallback_title="Vacío")

    output = console.export_text()
    assert "Vacío" in output
    assert "no questions" in output


def test_render_quiz_list() -> None:
    console = make_console()
    render_quiz_list(console, "Lectura-5", ["cuestionario-1.json"])
    assert "Cuestionario 1" in console.export_text()

    empty = make_console()
    render_quiz_list(empty, "Lectura-5", [])
    assert "No quizzes available in Lectura-5" in empty.export_text()


def test_multiple_choice_without_options_accepts_typed_letter() -> None:
    pool = [Question(text="q", correct_answer="a")]
    console = make_console()
    session = _started(pool, 1)

    assert parse_session_command("a", pool[0]) == SessionCommand("answer", "a")
    result = run_quiz(session, console, make_provider(["a", "n"]))

    assert result.exit_action == "completed"
    assert result.results.correct_count == 1


def test_bracketed_document_text_is_printed_literally() -> None:
    document = parse_document(
        {
            "cuestionario": {
                "titulo": "Unidad [/b] repaso",
                "descripcion": "Lee [/] el texto",
                "secciones": [
                    {
                        "preguntas": [
                            {
                                "pregunta": "¿[bold]?",
                                "tipo": "single_word",
                                "respuesta_correcta": "[/red]",
                            },
                            {
                                "pregunta": "Elige",
                                "opciones": {"[a]": "uno"},
                                "respuesta_correcta": "[a]",
                            },
                        ]
                    }
                ],
            }
        }
    )
    console = make_console()

    render_catalog(console, document)
    render_quiz_list(console, "Lectura [/i]", ["[/x].json"])

    output = console.export_text()
    assert "Unidad [/b] repaso" in output
    assert "Lee [/] el texto" in output
    assert "Correct answer: [/red]" in output
    assert "Lectura [/i]: 1 quiz(zes)" in output
