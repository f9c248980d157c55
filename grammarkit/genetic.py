"""Descriptions of grammar populations for a genetic search over grammars."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import Iterable, Set, Tuple


class RuleKindTag(enum.IntEnum):
    """The kinds of rule a description may ask for, in their order."""

    CYCLICAL = 0
    LEFT_RECURSIVE = 1
    RIGHT_RECURSIVE = 2
    MIDDLE_RECURSIVE = 3
    LL = 4
    LR = 5
    LALR = 6
    REGULAR = 7
    CONTEXT_FREE = 8
    ANY_KIND = 9


@dataclass(frozen=True, order=True)
class RuleKind:
    """A rule kind; ``parameter`` is the position or lookahead where the kind has one."""

    tag: RuleKindTag
    parameter: int = 0


class RhsShape(enum.IntEnum):
    """The shapes of right-hand side a description may ask for, in their order."""

    UNARY = 0
    BINARY = 1
    ANY = 2


_SHAPE_ARITY = {RhsShape.UNARY: 1, RhsShape.BINARY: 2, RhsShape.ANY: 0}


@dataclass(frozen=True, order=True)
class Rhs:
    """A right-hand side shape with its symbols and whether each is transparent."""

    shape: RhsShape
    symbols: Tuple[Tuple[int, bool], ...] = ()

    def __post_init__(self) -> None:
        symbols = tuple((sym, bool(transparent)) for sym, transparent in self.symbols)
        if len(symbols) != _SHAPE_ARITY[self.shape]:
            raise ValueError(f"{self.shape.name} right-hand side needs "
                             f"{_SHAPE_ARITY[self.shape]} symbols")
        object.__setattr__(self, "symbols", symbols)


@dataclass(frozen=True)
class Mutation:
    """Parameters of a mutation step."""

    randomness: int
    number_of_symbols: int


def _mutate_rhs(rhs: Rhs, mutation: Mutation) -> Rhs:
    # Right-hand sides are carried over unchanged.
    return Rhs(rhs.shape, rhs.symbols)


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class RuleDescription:
    """How many rules of a kind and shape a grammar should have."""

    rule_kind: RuleKind
    rhs: Rhs
    amount: range

    def _key(self):
        return (self.rule_kind, self.rhs, self.amount.start, self.amount.stop)

    def __lt__(self, other: "RuleDescription") -> bool:
        if not isinstance(other, RuleDescription):
            return NotImplemented
        return self._key() < other._key()

    def mutate(self, mutation: Mutation) -> "RuleDescription":
        """A mutated copy of this description."""
        return RuleDescription(self.rule_kind, _mutate_rhs(self.rhs, mutation), self.amount)


@dataclass
class Population:
    """A set of rule descriptions."""

    rule_descriptions: Set[RuleDescription] = field(default_factory=set)

    def mutate(self, mutation: Mutation) -> "Population":
        """A new population with every description mutated."""
        return Population({d.mutate(mutation) for d in sorted(self.rule_descriptions)})


class Target:
    """The population a search aims at, over a number of symbols."""

    def __init__(self, number_of_symbols: int, rule_descriptions: Iterable[RuleDescription]) -> None:
        self.number_of_symbols = number_of_symbols
        self.population = Population(set(rule_descriptions))