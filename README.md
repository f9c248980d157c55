# grammarkit

Tools for building, transforming and analysing context-free grammars, and for
generating random strings from them. Pure Python, no dependencies.

Symbols are plain integers handed out by a grammar's `SymbolSource`. Every rule
(`grammarkit.rule.Rule`: `lhs`, `rhs`, `history_id`) carries the id of a node in
the grammar's `HistoryGraph` (`grammarkit.history`), which records how the rule
came to be: the right-hand side it was written with, its precedence, its
binarization depth, eliminated nullable symbols, a weight.

## Modules

- `grammarkit.cfg` — `Cfg`, a grammar holding rules in insertion order;
  `Cfg.binarize()` returns a `BinarizedCfg`.
- `grammarkit.container` — `SymbolSource` and the `RuleContainer` base class
  (`sym`, `next_sym`, `num_syms`, `rules`, `retain`, `add_rule`, `rule`,
  `precedenced_rule`, `add_history_node`, `reverse`).
- `grammarkit.builder` — `RuleBuilder`, returned by `grammar.rule(lhs)`:
  `rhs`, `rhs_with_history`, `rhs_with_linked_history`, `history`.
- `grammarkit.precedence` — `PrecedencedRuleBuilder` and `Associativity`
  (`LEFT`, `RIGHT`, `GROUP`) for operator precedence.
- `grammarkit.binarized` — `BinarizedCfg` and `BinarizedRule`. Long right-hand
  sides are split into chains of binary rules; empty rules are kept apart, and
  `eliminate_nulling_rules()` splits them off into a separate grammar.
- `grammarkit.rhs_closure` — `RhsClosure`: propagates a per-symbol property
  (all / any of the right-hand side) or a least sum of values to left-hand sides.
- `grammarkit.symbol_set` — `SymbolBitSet`, including `terminal_set` and
  `terminal_or_nulling_set`.
- `grammarkit.derivation` — direct derivation, reachability and unit
  derivation matrices, plus `transitive_closure`.
- `grammarkit.cycles` — `Cycles`: detect (`cycle_free`, `cycle_participants`),
  remove (`remove_cycles`) or rewrite (`rewrite_cycles`) unit-rule cycles.
- `grammarkit.usefulness` — `Usefulness`: reachability and productivity,
  `useless_rules()` and `remove_useless_rules()`.
- `grammarkit.remap` — `Remap` and `Mapping`: remove unused symbols and
  reorder the rest, keeping track of external and internal ids.
- `grammarkit.lr` — `Lr0ClosureBuilder` and `Lr0FsmBuilder`, which builds the
  LR(0) states (`Lr0Node`) of a grammar augmented with a new start rule.
- `grammarkit.earley_grammar` — `Grammar` (a `Cfg` with a start symbol whose
  rules record their origin) and `BinarizedGrammar` (`wrap_start`,
  `make_proper`, `eliminate_nulling`, `remap_symbols`, `original_start`,
  `eof`, `dot_before_eof`, `is_empty`).
- `grammarkit.earley_history` — `final_history(grammar)` turns the history
  graph into one `History` (origin, `RuleDot`s, nullable info, weight) per node.
- `grammarkit.weighted` — `WeightedRhsByLhs` and `weighted(grammar)`; rules
  without a weight weigh 1.0.
- `grammarkit.random_gen` — `random_string` and `with_system_rng`, with
  `NegativeRule`, the number sources `RandomRange` and `ByteSource`, and the
  errors `LimitExceeded` and `NegativeRuleAttemptsExceeded` (both
  `RandomGenError`).
- `grammarkit.genetic` — `RuleDescription`, `Population`, `Target`, `Mutation`,
  `RuleKind` and `Rhs`: descriptions of grammar populations. Mutation currently
  copies descriptions unchanged.

## Installation

```
pip install .
```

## Examples

### Random strings

```python
from grammarkit.cfg import Cfg
from grammarkit.random_gen import with_system_rng

grammar = Cfg()
lhs, rhs = grammar.sym(2)
grammar.rule(lhs).rhs([rhs])

binarized = grammar.binarize()
symbols, chars = with_system_rng(
    binarized,
    lhs,
    1,
    [],
    lambda sym, rng: "X" if sym == rhs else None,
)
assert symbols == [rhs]
assert chars == "X"
```

For repeatable output, pass a `ByteSource(b"...")` or a
`RandomRange(random.Random(seed))` to `random_string`. A `limit` that is
exceeded raises `LimitExceeded`.

### Operator precedence

```python
from grammarkit.cfg import Cfg
from grammarkit.precedence import Associativity

grammar = Cfg()
expr, num, plus, times, power = grammar.sym(5)
(
    grammar.precedenced_rule(expr)
    .rhs([num])
    .associativity(Associativity.RIGHT)
    .rhs([expr, power, expr])
    .lower_precedence()
    .rhs([expr, times, expr])
    .lower_precedence()
    .rhs([expr, plus, expr])
    .finalize()
)
```

### Finding useless rules

```python
from grammarkit.cfg import Cfg
from grammarkit.usefulness import Usefulness

grammar = Cfg()
start, a, unused = grammar.sym(3)
grammar.rule(start).rhs([a])
grammar.rule(unused).rhs([a])

usefulness = Usefulness(grammar).reachable([start])
for useless in usefulness.useless_rules():
    print(useless.rule, useless.usefulness)
usefulness.remove_useless_rules()
```

## What it does not do

grammarkit prepares and analyses grammars; it does not parse input. There is
no Earley or LR recognizer, no parse table driver and no command-line tool.
Sequence (repetition) rules are not provided: `Grammar` builds plain rules
only, although `final_history` understands sequence rewrite nodes placed in the
history graph by hand.

## Running the tests

```
pip install .[test]
pytest
```