"""Sample quiz documents covering every question type."""

from __future__ import annotations

import copy
from typing import Any, Dict, List

_SAMPLE: Dict[str, Any] = {
    "cuestionario": {
        "titulo": "Sistema Solar",
        "autor": "Equipo docente",
        "descripcion": "Repaso de la lectura 5",
        "secciones": [
            {
                "titulo": "Astronomía básica",
                "preguntas": [
                    {
                        "pregunta": "¿Cuál es el planeta más grande?",
                        "opciones": {
                            "a": "Marte",
                            "b": "Júpiter",
                            "c": "Venus",
                        },
                        "respuesta_correcta": "b",
                        "referencia": "Capítulo 1, p. 4",
                    },
                    {
                        "pregunta": "¿Cómo se llama la estrella central?",
                        "tipo": "single_word",
                        "respuesta_correcta": "Sol",
                        "sinonimos": ["astro rey"],
                        "referencia": "Capítulo 1, p. 2",
                    },
                    {
                        "pregunta": "La Luna es un planeta.",
                        "tipo": "true_false",
                        "respuesta_correcta": "falso",
                        "referencia": "Capítulo 2, p. 9",
                    },
                ],
            },
            {
                "titulo": "Conceptos",
                "preguntas": [
                    {
                        "pregunta": "¿Por qué la Tierra gira alrededor del Sol?",
                        "tipo": "open_ended",
                        "palabras_clave": {
                            "palabras": ["gravedad", "órbita", "masa"],
                            "pesos": [2, 2, 1],
                            "sinonimos": {"órbita": ["trayectoria"]},
                            "umbral_minimo": 0.6,
                        },
                        "referencia": "Capítulo 3, p. 15",
                    },
                    {
                        "pregunta": "Las plantas producen energía mediante la ___.",
                        "tipo": "fill_blank",
                        "palabras_clave": {"palabras": ["fotosíntesis"]},
                        "referencia": "Capítulo 4, p. 20",
                    },
                ],
            },
        ],
    }
}


def sample_document() -> Dict[str, Any]:
    """Two sections (3 + 2 questions) in the on-disk JSON shape."""

    return copy.deepcopy(_SAMPLE)


def choice_questions(count: int) -> List[Dict[str, Any]]:
    return [
        {
            "pregunta": f"Pregunta {idx}",
            "opciones": {"a": "Sí", "b": "No"},
            "respuesta_correcta": "a",
        }
        for idx in range(1, count + 1)
    ]


def document_with(questions: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "cuestionario": {
            "titulo": "Generado",
            "autor": "tests",
            "secciones": [{"titulo": "Única", "preguntas": questions}],
        }
    }
