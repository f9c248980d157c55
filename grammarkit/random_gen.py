"""Random generation of strings from a binarized grammar, with negative rules."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from grammarkit.symbol_set import SymbolBitSet
from grammarkit.weighted import weighted

_MAX_NEGATIVE_ATTEMPTS = 256 * 64


class RandomGenError(Exception):
    """Random generation failed."""


class LimitExceeded(RandomGenError):
    """More terminals were produced than the limit allows."""


class NegativeRuleAttemptsExceeded(RandomGenError):
    """Too many attempts were spent avoiding a forbidden string."""


class RandomRange:
    """A source of random numbers backed by ``random.Random``."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def gen(self, limit: float) -> float:
        """A number in ``[0, limit)``."""
        return self._rng.random() * limit

    def mutate_start(self, attempt_number: int) -> None:
        """Skip ahead in the random stream, depending on the attempt number."""
        for _ in range(attempt_number + 1):
            self._rng.getrandbits(8)

    def clone(self) -> "RandomRange":
        rng = random.Random()
        rng.setstate(self._rng.getstate())
        return RandomRange(rng)


def _mix(byte: int) -> int:
    byte ^= byte >> 5
    byte = (byte * 123) & 0xFF
    byte ^= byte >> 5
    byte = (byte * 34) & 0xFF
    byte ^= byte >> 5
    return byte


class ByteSource:
    """A source of numbers driven by a fixed sequence of bytes; zero once exhausted."""

    def __init__(self, data: Iterable[int]) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._ahead: List[int] = []

    def _next_byte(self) -> int:
        if self._pos < len(self._data):
            byte = self._data[self._pos]
            self._pos += 1
            return byte
        return 0

    def gen(self, limit: float) -> float:
        """Scale the next byte onto ``[0, limit]``."""
        byte = self._ahead.pop() if self._ahead else self._next_byte()
        return byte * limit / 255.0

    def mutate_start(self, attempt_number: int) -> None:
        """Queue bytes mixed from the input and the attempt number."""
        mixed = [
            _mix(self._next_byte() ^ (attempt_number & 0xFF))
            for _ in range(attempt_number // 256 + 1)
        ]
        mixed.reverse()
        self._ahead.extend(mixed)

    def clone(self) -> "ByteSource":
        other = ByteSource(self._data)
        other._pos = self._pos
        other._ahead = list(self._ahead)
        return other


@dataclass(frozen=True)
class NegativeRule:
    """Forbids the string ``chars`` right where ``sym`` is generated."""

    sym: int
    chars: str


@dataclass
class _BacktrackState:
    forbidden: List[str]
    rng: object
    result_len: int
    prev_work: List[int]


def _ends_with(string: List[str], suffix: List[str]) -> bool:
    return len(suffix) <= len(string) and string[len(string) - len(suffix):] == suffix


def random_string(
    grammar,
    start: int,
    limit: Optional[int],
    rng,
    negative_rules: Sequence[NegativeRule],
    to_char: Callable[[int, object], Optional[str]],
) -> Tuple[List[int], str]:
    """Generate terminals from ``start``; return them with the characters ``to_char`` gave.

    Raises LimitExceeded when more than ``limit`` terminals are produced, and
    NegativeRuleAttemptsExceeded when a negative rule cannot be satisfied.
    """
    table = weighted(grammar)
    terminal_set = SymbolBitSet.terminal_set(grammar)
    negative: Dict[int, List[str]] = {neg.sym: list(neg.chars) for neg in negative_rules}
    backtracking: Dict[int, List[_BacktrackState]] = {}
    attempts: Dict[int, int] = {}
    # The top of the work stack is its last element.
    work: List[int] = [start]
    result: List[int] = []
    string: List[str] = []

    while work:
        sym = work.pop()
        if terminal_set.has_sym(sym):
            result.append(sym)
            ch = to_char(sym, rng)
            if ch is not None:
                string.append(ch)
            if limit is not None and len(result) > limit:
                raise LimitExceeded(f"more than {limit} terminals generated")
            for state in backtracking.get(len(string), ()):
                if not _ends_with(string, state.forbidden):
                    continue
                rng = state.rng.clone()
                del string[len(string) - len(state.forbidden):]
                del result[state.result_len:]
                work = list(state.prev_work)
                position = len(string)
                if position not in attempts:
                    raise KeyError(f"no backtracking attempts recorded at {position}")
                rng.mutate_start(attempts[position])
                attempts[position] += 1
                if attempts[position] > _MAX_NEGATIVE_ATTEMPTS:
                    raise NegativeRuleAttemptsExceeded(
                        f"negative rule not satisfied at position {position}"
                    )
        elif sym in negative:
            forbidden = negative[sym]
            backtracking.setdefault(len(string) + len(forbidden), []).append(
                _BacktrackState(forbidden, rng.clone(), len(result), list(work))
            )
            attempts.setdefault(len(string), 0)
        else:
            work.extend(reversed(table.pick_rhs(sym, rng)))

    return result, "".join(string)


def with_system_rng(
    grammar,
    start: int,
    limit: Optional[int] = None,
    negative_rules: Sequence[NegativeRule] = (),
    to_char: Callable[[int, object], Optional[str]] = lambda sym, rng: None,
) -> Tuple[List[int], str]:
    """Generate a random string using a freshly seeded random number generator."""
    return random_string(grammar, start, limit, RandomRange(), negative_rules, to_char)