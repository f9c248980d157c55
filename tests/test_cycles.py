from grammarkit.cfg import Cfg
from grammarkit.cycles import Cycles


def _pairs(rules):
    return [(r.lhs, r.rhs) for r in rules]


def test_cycle_free_grammar():
    g = Cfg()
    a, b, c = g.sym(3)
    g.rule(a).rhs([b, c]).rhs([b])
    cycles = Cycles(g)
    assert cycles.cycle_free()
    assert list(cycles.cycle_participants()) == []


def test_self_loop_is_not_a_cycle():
    g = Cfg()
    (a,) = g.sym(1)
    g.rule(a).rhs([a])
    assert Cycles(g).cycle_free()


def test_participants_and_removal():
    g = Cfg()
    a, b, c = g.sym(3)
    g.rule(a).rhs([b]).rhs([c])
    g.rule(b).rhs([a])
    cycles = Cycles(g)
    assert not cycles.cycle_free()
    assert _pairs(cycles.cycle_participants()) == [(a, (b,)), (b, (a,))]
    cycles.remove_cycles()
    assert _pairs(g.rules()) == [(a, (c,))]
    assert Cycles(g).cycle_free()


def test_rewrite_cycles_preserves_structure():
    g = Cfg()
    a, b, c, s = g.sym(4)
    g.rule(a).rhs([b])
    g.rule(b).rhs([a]).rhs([c])
    g.rule(s).rhs([b])
    cycles = Cycles(g)
    cycles.rewrite_cycles()
    assert set(_pairs(g.rules())) == {(a, (c,)), (s, (a,))}
    assert Cycles(g).cycle_free()


def test_rewrite_keeps_unrelated_rules():
    g = Cfg()
    a, b, x, y = g.sym(4)
    g.rule(a).rhs([b])
    g.rule(b).rhs([a])
    g.rule(x).rhs([y, y])
    Cycles(g).rewrite_cycles()
    assert _pairs(g.rules()) == [(x, (y, y))]