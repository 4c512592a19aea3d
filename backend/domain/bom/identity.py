"""
BOM Domain - Identity generators.

Expanding a saved tree onto the canvas needs node ids that never collide
with nodes already on the canvas or with a previous expansion of the same
tree. Generation sits behind a small interface so callers can inject
deterministic identities.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import itertools
import secrets
import time


class IdentityGenerator(ABC):
    """Source of graph identities."""

    @abstractmethod
    def namespace(self) -> str:
        """Return a fresh prefix for one expansion call."""

    @abstractmethod
    def ghost_component_id(self) -> str:
        """Return an id for a component without a stored definition."""


def _base36(number: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if number == 0:
        return "0"
    out = []
    while number:
        number, rem = divmod(number, 36)
        out.append(digits[rem])
    return "".join(reversed(out))


class RandomIdentityGenerator(IdentityGenerator):
    """Timestamp plus random suffix, e.g. ``bom-lq3k9a2b-x7f2c``."""

    def namespace(self) -> str:
        stamp = _base36(time.time_ns() // 1_000_000)
        return f"bom-{stamp}-{secrets.token_hex(3)[:5]}"

    def ghost_component_id(self) -> str:
        return f"ghost-{secrets.token_hex(6)}"


class SequentialIdentityGenerator(IdentityGenerator):
    """Deterministic identities: ``{prefix}1``, ``{prefix}2``, ..."""

    def __init__(self, prefix: str = "bom", ghost_prefix: str = "ghost"):
        self.prefix = prefix
        self.ghost_prefix = ghost_prefix
        self._namespaces = itertools.count(1)
        self._ghosts = itertools.count(1)

    def namespace(self) -> str:
        return f"{self.prefix}{next(self._namespaces)}"

    def ghost_component_id(self) -> str:
        return f"{self.ghost_prefix}-{next(self._ghosts)}"
