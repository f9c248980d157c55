from grammarkit.cfg import Cfg
from grammarkit.usefulness import RuleUsefulness, Usefulness


def _pairs(rules):
    return [(r.lhs, r.rhs) for r in rules]


def test_rule_usefulness_is_useless():
    assert RuleUsefulness(reachable=True, productive=True).is_useless() is False
    assert RuleUsefulness(reachable=False, productive=True).is_useless()
    assert RuleUsefulness(reachable=True, productive=False).is_useless()


def test_all_useful_grammar():
    g = Cfg()
    s, a = g.sym(2)
    g.rule(s).rhs([a])
    u = Usefulness(g).reachable([s])
    assert u.all_useful()
    assert list(u.useless_rules()) == []
    u.remove_useless_rules()
    assert _pairs(g.rules()) == [(s, (a,))]


def test_unproductive_rules():
    g = Cfg()
    s, a, x = g.sym(3)
    g.rule(s).rhs([a]).rhs([x])
    g.rule(x).rhs([x])
    u = Usefulness(g).reachable([s])
    assert not u.productivity(x)
    assert u.productivity(a)
    assert not u.all_productive()
    assert u.all_reachable()
    useless = list(u.useless_rules())
    assert [(r.rule.lhs, r.rule.rhs) for r in useless] == [(s, (x,)), (x, (x,))]
    assert not any(r.usefulness.productive for r in useless)
    u.remove_useless_rules()
    assert _pairs(g.rules()) == [(s, (a,))]


def test_unreachable_rules():
    g = Cfg()
    s, a, t, b = g.sym(4)
    g.rule(s).rhs([a])
    g.rule(t).rhs([b])
    u = Usefulness(g).reachable([s])
    assert u.all_productive()
    assert not u.all_reachable()
    useless = list(u.useless_rules())
    assert [(r.rule.lhs, r.rule.rhs) for r in useless] == [(t, (b,))]
    assert not useless[0].usefulness.reachable
    u.remove_useless_rules()
    assert _pairs(g.rules()) == [(s, (a,))]


def test_unused_symbols_count_as_useful():
    g = Cfg()
    s, a, spare = g.sym(3)
    g.rule(s).rhs([a])
    u = Usefulness(g)
    assert u.productivity(spare)
    assert not u.all_reachable()
    u.reachable([s])
    assert u.all_useful()


def test_empty_rule_is_productive():
    g = Cfg()
    s, n = g.sym(2)
    g.rule(s).rhs([n])
    g.rule(n).rhs([])
    u = Usefulness(g).reachable([s])
    assert u.productivity(n)
    assert u.all_useful()