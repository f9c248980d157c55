import pytest

from grammarkit.builder import RuleBuilder
from grammarkit.container import RuleContainer
from grammarkit.history import LinkedNode, RhsNode, RootRule, WeightNode
from grammarkit.precedence import PrecedencedRuleBuilder
from grammarkit.rule import Rule


class ListContainer(RuleContainer):
    def __init__(self, sym_source=None):
        super().__init__(sym_source)
        self._rules = []

    def rules(self):
        return iter(self._rules)

    def retain(self, predicate):
        self._rules = [rule for rule in self._rules if predicate(rule)]

    def add_rule(self, rule):
        self._rules.append(rule)


def test_rhs_without_history_creates_root_and_rhs_nodes():
    grammar = ListContainer()
    lhs, a = grammar.sym(2)
    RuleBuilder(grammar).rule(lhs).rhs([a])
    (rule,) = grammar.rules()
    node = grammar.history_graph[rule.history_id]
    assert node.node == RhsNode((a,))
    assert grammar.history_graph[node.prev] == RootRule(lhs=lhs)


def test_rhs_with_history_links_to_given_history():
    grammar = ListContainer()
    lhs, a = grammar.sym(2)
    base = grammar.add_history_node(RootRule(lhs=a))
    RuleBuilder(grammar).rule(lhs).history(base).rhs([a, a])
    (rule,) = grammar.rules()
    assert grammar.history_graph[rule.history_id] == LinkedNode(prev=base, node=RhsNode((a, a)))


def test_history_applies_only_to_next_rhs():
    grammar = ListContainer()
    lhs, a = grammar.sym(2)
    base = grammar.add_history_node(RootRule(lhs=a))
    RuleBuilder(grammar).rule(lhs).history(base).rhs([a]).rhs([])
    second = list(grammar.rules())[1]
    node = grammar.history_graph[second.history_id]
    assert node.prev != base
    assert grammar.history_graph[node.prev] == RootRule(lhs=lhs)


def test_rule_resets_history():
    grammar = ListContainer()
    lhs, other, a = grammar.sym(3)
    base = grammar.add_history_node(RootRule(lhs=a))
    RuleBuilder(grammar).rule(lhs).history(base).rule(other).rhs([a])
    (rule,) = grammar.rules()
    node = grammar.history_graph[rule.history_id]
    assert grammar.history_graph[node.prev] == RootRule(lhs=other)


def test_rhs_with_history_uses_id_verbatim():
    grammar = ListContainer()
    lhs, a = grammar.sym(2)
    before = len(grammar.history_graph)
    RuleBuilder(grammar).rule(lhs).rhs_with_history([a], 7)
    assert list(grammar.rules()) == [Rule(lhs, (a,), 7)]
    assert len(grammar.history_graph) == before


def test_rhs_with_linked_history_chains_three_nodes():
    grammar = ListContainer()
    lhs, a = grammar.sym(2)
    RuleBuilder(grammar).rule(lhs).rhs_with_linked_history([a], WeightNode(weight=0.5))
    (rule,) = grammar.rules()
    top = grammar.history_graph[rule.history_id]
    assert top.node == WeightNode(weight=0.5)
    middle = grammar.history_graph[top.prev]
    assert middle.node == RhsNode((a,))
    assert grammar.history_graph[middle.prev] == RootRule(lhs=lhs)


def test_rhs_without_lhs_raises():
    grammar = ListContainer()
    (a,) = grammar.sym(1)
    with pytest.raises(ValueError):
        RuleBuilder(grammar).rhs([a])
    with pytest.raises(ValueError):
        RuleBuilder(grammar).rhs_with_history([a], 1)


def test_precedenced_rule_hands_over_container():
    grammar = ListContainer()
    lhs, a = grammar.sym(2)
    builder = RuleBuilder(grammar).rule(lhs).rhs([a]).precedenced_rule(a)
    assert isinstance(builder, PrecedencedRuleBuilder)
    builder.rhs([lhs]).finalize()
    assert [r.lhs for r in grammar.rules()][0] == lhs
    assert list(grammar.rules())[-1].lhs == a