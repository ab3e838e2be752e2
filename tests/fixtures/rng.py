"""Deterministic stand-ins for ``random.Random`` in shuffle tests."""

from __future__ import annotations

import random
from typing import Iterable


class FixedRandom(random.Random):
    """Yield the given floats from ``random()``, cycling forever."""

    def __init__(self, values: Iterable[float]) -> None:
        super().__init__(0)
        self._values = list(values)
        self._position = 0

    def random(self) -> float:  # noqa: D401
        value = self._values[self._position % len(self._values)]
        self._position += 1
        return value


def identity_random() -> FixedRandom:
    """Random source under which Fisher-Yates keeps the input order."""

    return FixedRandom([0.999999])
