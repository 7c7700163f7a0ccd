from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable

import pytest

from poisson_engine.rng import NumpyRandomSource


class ScriptedSource:
    """Random source replaying fixed uniform/normal/exponential values."""

    def __init__(
        self,
        uniforms: Iterable[float] = (),
        normals: Iterable[float] = (),
        exponentials: Iterable[float] = (),
    ) -> None:
        self._uniforms = list(uniforms)
        self._normals = list(normals)
        self._exponentials = list(exponentials)
        self.calls: Counter[str] = Counter()

    def _pop(self, queue: list[float], kind: str) -> float:
        self.calls[kind] += 1
        if not queue:
            raise AssertionError(f"scripted source ran out of {kind} values")
        return queue.pop(0)

    def uniform(self) -> float:
        return self._pop(self._uniforms, "uniform")

    def normal(self) -> float:
        return self._pop(self._normals, "normal")

    def exponential(self) -> float:
        return self._pop(self._exponentials, "exponential")


class RecordingSource:
    """Wraps a real source and counts calls per kind."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.calls: Counter[str] = Counter()

    def uniform(self) -> float:
        self.calls["uniform"] += 1
        return self.inner.uniform()

    def normal(self) -> float:
        self.calls["normal"] += 1
        return self.inner.normal()

    def exponential(self) -> float:
        self.calls["exponential"] += 1
        return self.inner.exponential()


@pytest.fixture()
def scripted_source() -> Callable[..., ScriptedSource]:
    return ScriptedSource


@pytest.fixture()
def recording_source() -> Callable[[int], RecordingSource]:
    def _build(seed: int = 0) -> RecordingSource:
        return RecordingSource(NumpyRandomSource(seed))

    return _build
