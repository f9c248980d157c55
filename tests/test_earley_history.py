import pytest

from grammarkit.earley_grammar import Grammar
from grammarkit.earley_history import (
    History,
    RuleDot,
    SequenceDetails,
    final_history,
)
from grammarkit.history import BinarizedRhsSubset, WeightNode


def test_rule_dot_trace_and_event():
    dot = RuleDot.at(3, 1)
    assert dot.trace() == (3, 1)
    assert dot.event_without_tracing() == (None, None)
    assert RuleDot.none().trace() is None
    assert RuleDot.none().event_without_tracing() == (None, None)


def test_history_new():
    history = History.new(7, 2)
    assert history.origin == 7
    assert len(history.dots) == 3
    assert [history.dot(i).trace() for i in range(3)] == [(7, 0), (7, 1), (7, 2)]


def test_binarize_two_dots():
    history = History.new(5, 1)
    result = history.binarize(0)
    assert result.dots == (history.dot(0), RuleDot.none(), history.dot(1))
    assert result.origin == history.origin


def test_binarize_long_rule():
    history = History.new(5, 3)
    top = history.binarize(0)
    assert top.dots == (history.dot(0), history.dot(2), history.dot(3))
    inner = history.binarize(1)
    assert inner.dots == (RuleDot.none(), history.dot(1), RuleDot.none())
    assert inner.origin is None


def test_binarize_empty_and_too_deep():
    assert History().binarize(0).dots == (RuleDot.none(),) * 3
    with pytest.raises(IndexError):
        History.new(1, 0).binarize(1)


def test_eliminate_nulling():
    history = History.new(4, 2)
    assert history.eliminate_nulling(10, 11, BinarizedRhsSubset.ALL) == History(origin=4)
    left = history.eliminate_nulling(10, 11, BinarizedRhsSubset.LEFT)
    assert left.nullable == (10, False)
    assert left.dots == history.dots
    right = history.eliminate_nulling(10, 11, BinarizedRhsSubset.RIGHT)
    assert right.nullable == (11, True)
    with pytest.raises(ValueError):
        history.eliminate_nulling(10, None, BinarizedRhsSubset.RIGHT)


def test_rewrite_sequence_bottom_and_top():
    history = History.new(2, 2)
    details = SequenceDetails(top=False, rhs=10, sep=11)
    bottom = history.rewrite_sequence(details, [10, 11, 10])
    assert bottom.dots == (history.dot(0), history.dot(1), history.dot(2), history.dot(1))
    assert bottom.origin is None
    top = history.rewrite_sequence(SequenceDetails(top=True, rhs=10, sep=11), [10, 11, 10])
    assert top.dots == bottom.dots
    assert top.origin == history.origin


def test_final_history_of_binarized_rule():
    grammar = Grammar()
    a, b = grammar.sym(2)
    grammar.rule(a).rhs([b])
    binarized = grammar.binarize()
    final = final_history(binarized)
    assert len(final) == len(binarized.history_graph)
    (rule,) = list(binarized.rules())
    history = final[rule.history_id]
    assert history.origin == 0
    assert history.dots == (RuleDot.at(0, 0), RuleDot.none(), RuleDot.at(0, 1))


def test_final_history_weight():
    grammar = Grammar()
    a, b = grammar.sym(2)
    grammar.rule(a).rhs_with_linked_history([b], WeightNode(2.5))
    (rule,) = list(grammar.rules())
    final = final_history(grammar)
    assert final[rule.history_id].weight == 2.5
    assert len(final[rule.history_id].dots) == 2