from grammarkit.cfg import Cfg
from grammarkit.history import WeightNode
from grammarkit.weighted import WeightedRhsByLhs, weighted


class FixedRng:
    def __init__(self, value):
        self.value = value
        self.limits = []

    def gen(self, limit):
        self.limits.append(limit)
        return self.value


def test_single_alternative_skips_rng():
    table = WeightedRhsByLhs()
    table.add_weight(5.0, 0, [1, 2])
    rng = FixedRng(0.0)
    assert table.pick_rhs(0, rng) == (1, 2)
    assert rng.limits == []


def test_unknown_lhs_gives_empty_rhs():
    table = WeightedRhsByLhs()
    table.add_weight(1.0, 0, [1])
    assert table.pick_rhs(7, FixedRng(0.0)) == ()


def test_pick_follows_weights():
    table = WeightedRhsByLhs()
    table.add_weight(1.0, 0, [1])
    table.add_weight(3.0, 0, [2])
    assert table.pick_rhs(0, FixedRng(0.5)) == (1,)
    assert table.pick_rhs(0, FixedRng(2.0)) == (2,)


def test_value_at_boundary_picks_earlier_alternative():
    table = WeightedRhsByLhs()
    table.add_weight(1.0, 0, [1])
    table.add_weight(1.0, 0, [2])
    assert table.pick_rhs(0, FixedRng(1.0)) == (1,)
    assert table.pick_rhs(0, FixedRng(0.0)) == (1,)


def test_weighted_defaults_to_unit_weight():
    grammar = Cfg()
    s, a, b = grammar.sym(3)
    grammar.rule(s).rhs([a]).rhs([b])
    rng = FixedRng(0.0)
    weighted(grammar).pick_rhs(s, rng)
    assert rng.limits == [2.0]


def test_weighted_reads_weight_nodes():
    grammar = Cfg()
    s, a, b = grammar.sym(3)
    grammar.rule(s).rhs_with_linked_history([a], WeightNode(3.0))
    grammar.rule(s).rhs([b])
    rng = FixedRng(2.5)
    table = weighted(grammar)
    assert table.pick_rhs(s, rng) == (a,)
    assert rng.limits == [4.0]
    assert table.pick_rhs(s, FixedRng(3.5)) == (b,)


def test_weighted_on_binarized_grammar_follows_history():
    grammar = Cfg()
    s, a, b, c = grammar.sym(4)
    grammar.rule(s).rhs_with_linked_history([a, b, c], WeightNode(2.0))
    grammar.rule(s).rhs([a])
    binarized = grammar.binarize()
    rng = FixedRng(0.0)
    weighted(binarized).pick_rhs(s, rng)
    assert rng.limits == [3.0]