"""Grammar rules: a left-hand symbol, a right-hand side and a history id."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rule:
    """A context-free rule carrying a history id."""

    lhs: int
    rhs: Tuple[int, ...]
    history_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "rhs", tuple(self.rhs))