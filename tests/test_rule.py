import dataclasses

import pytest

from grammarkit.rule import Rule


def test_rhs_is_stored_as_tuple():
    rule = Rule(lhs=0, rhs=[1, 2], history_id=1)
    assert rule.rhs == (1, 2)


def test_rules_compare_by_value():
    assert Rule(0, [1], 1) == Rule(0, (1,), 1)
    assert Rule(0, [1], 1) != Rule(0, [1], 2)


def test_rule_is_immutable():
    rule = Rule(0, [], 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rule.lhs = 3
    assert rule.lhs == 0
    assert rule == Rule(0, (), 1)


def test_replace_builds_new_rule():
    rule = Rule(0, [1, 2], 4)
    reversed_rule = dataclasses.replace(rule, rhs=list(reversed(rule.rhs)))
    assert reversed_rule.rhs == (2, 1)
    assert reversed_rule.lhs == rule.lhs
    assert reversed_rule.history_id == rule.history_id