from __future__ import annotations

from quiz_engine.models import (
    DEFAULT_MIN_THRESHOLD,
    KeywordSpec,
    QuestionType,
    parse_document,
    parse_question,
)


def test_parse_document_maps_fields(sample_doc) -> None:
    doc = parse_document(sample_doc)

    assert doc.title == "Sistema Solar"
    assert doc.author == "Equipo docente"
    assert doc.description == "Repaso de la lectura 5"
    assert [s.title for s in doc.sections] == ["Astronomía básica", "Conceptos"]
    assert doc.question_count == 5

    first = doc.sections[0].questions[0]
    assert first.type is QuestionType.MULTIPLE_CHOICE
    assert first.raw_type is None
    assert first.options["b"] == "Júpiter"
    assert first.correct_answer == "b"
    assert first.reference == "Capítulo 1, p. 4"

    open_ended = doc.sections[1].questions[0]
    spec = open_ended.keyword_spec
    assert open_ended.type is QuestionType.OPEN_ENDED
    assert spec is not None
    assert spec.words == ("gravedad", "órbita", "masa")
    assert spec.weights == (2, 2, 1)
    assert spec.synonyms_for("órbita") == ("trayectoria",)
    assert spec.min_threshold == 0.6


def test_parse_question_defaults_and_unknown_tags() -> None:
    unknown = parse_question({"pregunta": "Ensayo", "tipo": "essay"})
    assert unknown.type is QuestionType.UNKNOWN
    assert unknown.raw_type == "essay"

    blank_tag = parse_question({"pregunta": "x", "tipo": ""})
    assert blank_tag.type is QuestionType.MULTIPLE_CHOICE

    keywords = parse_question(
        {"pregunta": "x", "tipo": "multiple_keywords", "palabras_clave": None}
    )
    assert keywords.keyword_spec == KeywordSpec()
    assert keywords.keyword_spec.min_threshold == DEFAULT_MIN_THRESHOLD

    single = parse_question(
        {"pregunta": "x", "tipo": "single_word", "palabras_clave": {}}
    )
    assert single.keyword_spec is None


def test_keyword_spec_weight_defaults() -> None:
    spec = KeywordSpec(words=("a", "b", "c"), weights=(3, 0))

    assert spec.weight_for(0) == 3
    assert spec.weight_for(1) == 1
    assert spec.weight_for(2) == 1
    assert spec.synonyms_for("missing") == ()


def test_parse_keyword_spec_ignores_bad_values() -> None:
    question = parse_question(
        {
            "pregunta": "x",
            "tipo": "fill_blank",
            "palabras_clave": {
                "palabras": ["uno", None, "dos"],
                "pesos": [2, "pesado"],
                "umbral_minimo": "alto",
            },
        }
    )
    spec = question.keyword_spec

    assert spec.words == ("uno", "dos")
    assert spec.weight_for(1) == 1
    assert spec.min_threshold == DEFAULT_MIN_THRESHOLD


def test_parse_document_tolerates_malformed_input() -> None:
    assert parse_document(None).sections == ()
    assert parse_document({"otro": {}}).sections == ()
    assert parse_document({"cuestionario": {"titulo": "T"}}).title == "T"

    doc = parse_document(
        {
            "cuestionario": {
                "secciones": [
                    {"titulo": "sin preguntas"},
                    {"titulo": "no lista", "preguntas": "nada"},
                    "no es sección",
                    {"titulo": "mixta", "preguntas": [42, {"pregunta": "ok"}]},
                ]
            }
        }
    )

    assert [len(s.questions) for s in doc.sections] == [0, 0, 1]
    assert doc.sections[2].questions[0].text == "ok"
