from __future__ import annotations

from typing import Collection, Protocol
from uuid import uuid4


class IdGenerator(Protocol):
    """Returns a fresh id that is not in ``reserved``."""

    def __call__(self, reserved: Collection[str]) -> str:
        ...


class SequentialIdGenerator:
    """Deterministic ids: ``prefix0``, ``prefix1``, ... skipping reserved ones."""

    def __init__(self, prefix: str = "node_", start: int = 0) -> None:
        self.prefix = prefix
        self._next = start

    def __call__(self, reserved: Collection[str]) -> str:
        while True:
            candidate = f"{self.prefix}{self._next}"
            self._next += 1
            if candidate not in reserved:
                return candidate


class UuidIdGenerator:
    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def __call__(self, reserved: Collection[str]) -> str:
        while True:
            candidate = f"{self.prefix}{uuid4().hex}"
            if candidate not in reserved:
                return candidate
