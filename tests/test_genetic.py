import pytest

from grammarkit.genetic import (
    Mutation,
    Population,
    Rhs,
    RhsShape,
    RuleDescription,
    RuleKind,
    RuleKindTag,
    Target,
)


def _context_free_any(amount=range(10, 20)):
    return RuleDescription(
        rule_kind=RuleKind(RuleKindTag.CONTEXT_FREE), rhs=Rhs(RhsShape.ANY), amount=amount
    )


def test_zero_mutation():
    rule_descriptions = {_context_free_any()}
    target = Target(10, set(rule_descriptions))
    mutation = Mutation(randomness=0, number_of_symbols=10)
    mutated = target.population.mutate(mutation)
    for description in target.population.rule_descriptions:
        assert description in rule_descriptions
    assert mutated.rule_descriptions == rule_descriptions
    assert target.number_of_symbols == 10


def test_mutation_keeps_binary_rhs():
    description = RuleDescription(
        RuleKind(RuleKindTag.LR, 1),
        Rhs(RhsShape.BINARY, ((3, True), (4, False))),
        range(1, 2),
    )
    mutated = Population({description}).mutate(Mutation(5, 8))
    assert mutated.rule_descriptions == {description}


def test_rule_kind_order_follows_declaration():
    assert RuleKind(RuleKindTag.CYCLICAL) < RuleKind(RuleKindTag.CONTEXT_FREE)
    assert RuleKind(RuleKindTag.LL, 1) < RuleKind(RuleKindTag.LL, 2)
    assert RuleKind(RuleKindTag.LL, 5) < RuleKind(RuleKindTag.LR, 0)


def test_rhs_order_follows_declaration():
    unary = Rhs(RhsShape.UNARY, ((9, False),))
    binary = Rhs(RhsShape.BINARY, ((0, False), (0, False)))
    assert unary < binary < Rhs(RhsShape.ANY)


def test_rhs_requires_matching_symbol_count():
    with pytest.raises(ValueError):
        Rhs(RhsShape.UNARY, ())
    with pytest.raises(ValueError):
        Rhs(RhsShape.ANY, ((1, False),))


def test_description_order_breaks_ties_by_amount():
    low = _context_free_any(range(1, 5))
    high = _context_free_any(range(1, 6))
    later = _context_free_any(range(2, 3))
    assert sorted([later, high, low]) == [low, high, later]


def test_population_deduplicates_equal_descriptions():
    target = Target(3, [_context_free_any(), _context_free_any()])
    assert target.population.rule_descriptions == {_context_free_any()}