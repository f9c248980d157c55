"""LR(0) items, their closures and the LR(0) finite state machine."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple

from grammarkit.history import RootNoOp
from grammarkit.symbol_set import SymbolBitSet


@dataclass(frozen=True, order=True)
class Lr0Item:
    """A rule's right-hand side with a dot position in it."""

    rhs: Tuple[int, ...]
    dot: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "rhs", tuple(self.rhs))

    @property
    def postdot(self) -> Optional[int]:
        """The symbol right after the dot, if any."""
        return self.rhs[self.dot] if self.dot < len(self.rhs) else None


@dataclass
class Lr0Items:
    """A set of LR(0) items, keyed by rule id."""

    map: Dict[int, Lr0Item] = field(default_factory=dict)

    def _frozen(self) -> Tuple[Tuple[int, Lr0Item], ...]:
        return tuple(sorted(self.map.items()))


@dataclass
class Lr0Node:
    """A state of the LR(0) machine: its items and its transitions through terminals."""

    items: Lr0Items
    link: Dict[int, int] = field(default_factory=dict)


class Lr0ClosureBuilder:
    """Computes closures of LR(0) item sets over a grammar."""

    def __init__(self, grammar) -> None:
        self.grammar = grammar
        self.terminal_set = SymbolBitSet.terminal_set(grammar)

    def _nonterminal_postdot(self, item: Lr0Item) -> Optional[int]:
        postdot = item.postdot
        if postdot is None or self.terminal_set.has_sym(postdot):
            return None
        return postdot

    def closure(self, items: Lr0Items) -> Lr0Items:
        """Add the initial items of every rule predicted by ``items``; update and return it."""
        queue: Deque[Lr0Item] = deque(item for _, item in sorted(items.map.items()))
        while queue:
            nonterminal = self._nonterminal_postdot(queue.popleft())
            if nonterminal is None:
                continue
            for rule_id, rule in enumerate(self.grammar.rules()):
                if rule.lhs != nonterminal:
                    continue
                new_item = Lr0Item(rule.rhs, 0)
                is_new = rule_id not in items.map
                items.map[rule_id] = new_item
                if is_new:
                    queue.append(new_item)
        return items

    def advance(self, items: Lr0Items, sym: int) -> Optional[Lr0Items]:
        """Move the dot over ``sym`` where possible and close the result; None if empty."""
        new_items = Lr0Items(
            {
                rule_id: Lr0Item(item.rhs, item.dot + 1)
                for rule_id, item in sorted(items.map.items())
                if item.postdot == sym
            }
        )
        if not new_items.map:
            return None
        return self.closure(new_items)


class Lr0FsmBuilder:
    """Builds the LR(0) finite state machine of a grammar."""

    def __init__(self, grammar) -> None:
        self._closure = Lr0ClosureBuilder(grammar)
        self._sets_queue: Deque[Lr0Items] = deque()
        self._cached_sets: Dict[tuple, int] = {}

    def make_lr0_fsm(self, start_sym: int) -> List[Lr0Node]:
        """Augment the grammar with a new start rule and build the machine's states."""
        self._cached_sets.clear()
        self._sets_queue.clear()
        self._introduce_set(self._initial_item_set(start_sym), 0)
        result: List[Lr0Node] = []
        while self._sets_queue:
            items = self._sets_queue.popleft()
            link: Dict[int, int] = {}
            for terminal in list(self._closure.terminal_set):
                advanced = self._closure.advance(items, terminal)
                if advanced is not None:
                    link[terminal] = self._id_of(advanced)
            result.append(Lr0Node(items, link))
        return result

    def _initial_item_set(self, start_sym: int) -> Lr0Items:
        new_start_rule_id = self._augment_grammar(start_sym)
        items = Lr0Items({new_start_rule_id: Lr0Item((start_sym,), 0)})
        return self._closure.closure(items)

    def _augment_grammar(self, start_sym: int) -> int:
        grammar = self._closure.grammar
        new_start = grammar.next_sym()
        rule_id = sum(1 for _ in grammar.rules())
        history_id = grammar.add_history_node(RootNoOp())
        grammar.rule(new_start).rhs_with_history([start_sym], history_id)
        return rule_id

    def _id_of(self, items: Lr0Items) -> int:
        existing = self._cached_sets.get(items._frozen())
        if existing is not None:
            return existing
        set_id = len(self._cached_sets)
        self._introduce_set(items, set_id)
        return set_id

    def _introduce_set(self, items: Lr0Items, set_id: int) -> None:
        self._cached_sets[items._frozen()] = set_id
        self._sets_queue.append(items)