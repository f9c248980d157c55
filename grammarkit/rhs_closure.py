"""Right-hand-side closure: propagates a symbol property from right-hand sides to left-hand sides."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional

from grammarkit.rule import Rule


class RhsClosure:
    """Records which rules each symbol appears in, to compute closures over a grammar."""

    def __init__(self, grammar) -> None:
        self._inverse: Dict[int, List[Rule]] = defaultdict(list)
        for rule in grammar.rules():
            for sym in rule.rhs:
                self._inverse[sym].append(rule)

    def _derivations(self, sym: int) -> List[Rule]:
        return self._inverse.get(sym, [])

    def rhs_closure(self, prop: List[bool]) -> List[bool]:
        """Mark every left-hand side whose right-hand side has the property in full.

        ``prop`` is updated in place and returned.
        """
        work_stack = [sym for sym, has_prop in enumerate(prop) if has_prop]
        while work_stack:
            work_sym = work_stack.pop()
            for rule in self._derivations(work_sym):
                if not prop[rule.lhs] and all(prop[sym] for sym in rule.rhs):
                    prop[rule.lhs] = True
                    work_stack.append(rule.lhs)
        return prop

    def rhs_closure_for_any(self, prop: List[bool]) -> List[bool]:
        """Mark every left-hand side with at least one right-hand symbol that has the property.

        ``prop`` is updated in place and returned.
        """
        work_stack = [sym for sym, has_prop in enumerate(prop) if has_prop]
        while work_stack:
            work_sym = work_stack.pop()
            for rule in self._derivations(work_sym):
                if not prop[rule.lhs] and any(prop[sym] for sym in rule.rhs):
                    prop[rule.lhs] = True
                    work_stack.append(rule.lhs)
        return prop

    def rhs_closure_with_values(self, values: List[Optional[int]]) -> List[Optional[int]]:
        """Give each left-hand side the least sum of values over its right-hand sides.

        ``values`` is updated in place and returned.
        """
        work_stack = [sym for sym, value in enumerate(values) if value is not None]
        while work_stack:
            work_sym = work_stack.pop()
            for rule in self._derivations(work_sym):
                rhs_values = [values[sym] for sym in rule.rhs]
                if any(value is None for value in rhs_values):
                    continue
                work_value = sum(rhs_values)
                current = values[rule.lhs]
                if current is not None and current <= work_value:
                    continue
                values[rule.lhs] = work_value
                work_stack.append(rule.lhs)
        return values