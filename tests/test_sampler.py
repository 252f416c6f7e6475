from collections import Counter

import pytest

from forms import call, Literal
from grammar import Grammar
from nodes import construct, depth, get, iter_nodes, replace
from sampler import TreeSampler, generate_random_tree, sample_location, sample_node
from utils import DepthBudgetExceededError, NoMatchingNodeError, reseed


def five_node_tree(G):
    one, two = construct(G, 1), construct(G, 2)
    return construct(G, 0, [construct(G, 0, [one, two]), construct(G, 1)])


def test_sample_node_is_roughly_uniform(plus_grammar):
    reseed(0)
    tree = five_node_tree(plus_grammar)
    nodes = list(iter_nodes(tree))
    nb_samples = 5000

    counts = Counter(id(sample_node(tree)) for _ in range(nb_samples))

    assert set(counts) == {id(n) for n in nodes}
    for n in nodes:
        assert abs(counts[id(n)] / nb_samples - 1.0 / len(nodes)) < 0.03


def test_sample_node_by_type(typed_grammar):
    reseed(1)
    G = typed_grammar
    tree = construct(G, 0, [construct(G, 2), construct(G, 1, [construct(G, 4)])])

    for _ in range(50):
        node = sample_node(tree, 'Int', G)
        assert G.return_type(node.rule_index) == 'Int'
        assert node is tree.children[1].children[0]

    with pytest.raises(NoMatchingNodeError):
        sample_node(construct(G, 2), 'Int', G)


def test_type_filter_needs_grammar(plus_grammar):
    tree = five_node_tree(plus_grammar)
    with pytest.raises(AssertionError):
        sample_node(tree, 'Real')


def test_sample_location_round_trip(plus_grammar):
    reseed(2)
    tree = five_node_tree(plus_grammar)
    before = tree.copy()

    for _ in range(100):
        loc = sample_location(tree)
        sub = get(tree, loc)
        replace(tree, loc, sub)
        assert tree == before
        replace(tree, loc, sub.copy())
        assert tree == before


def test_sample_location_by_type(typed_grammar):
    reseed(3)
    G = typed_grammar
    tree = construct(G, 0, [construct(G, 2), construct(G, 1, [construct(G, 3)])])

    seen = set()
    for _ in range(100):
        loc = sample_location(tree, 'Real', G)
        seen.add(id(get(tree, loc)))
        assert G.return_type(get(tree, loc).rule_index) == 'Real'
    assert len(seen) == 3

    with pytest.raises(NoMatchingNodeError):
        sample_location(tree, 'Bool', G)


def test_random_trees_respect_depth_budget(arith_grammar, typed_grammar):
    reseed(4)
    for G in [arith_grammar, typed_grammar]:
        for max_depth in range(5):
            for _ in range(50):
                tree = generate_random_tree(G, 'Real', max_depth)
                assert depth(tree) <= max_depth
                assert G.return_type(tree.rule_index) == 'Real'


def test_zero_budget_gives_terminals(arith_grammar):
    reseed(5)
    for _ in range(20):
        tree = generate_random_tree(arith_grammar, 'Real', 0)
        assert arith_grammar.is_terminal(tree.rule_index)


def test_infeasible_budget_fails_before_generation():
    G = Grammar([
        ('Top', call('f', 'Real')),
        ('Real', Literal(1)),
        ('Loop', call('g', 'Loop')),
    ])

    with pytest.raises(DepthBudgetExceededError):
        generate_random_tree(G, 'Top', 0)
    with pytest.raises(DepthBudgetExceededError):
        generate_random_tree(G, 'Loop', 10)
    assert depth(generate_random_tree(G, 'Top', 1)) == 1


def test_weighted_rule_choice(arith_grammar):
    reseed(6)
    # only `x` may be chosen at the root
    TS = TreeSampler(arith_grammar, weights={0: 0.0, 1: 0.0, 2: 1.0, 3: 0.0, 4: 0.0})
    for _ in range(20):
        assert TS.sample_tree('Real', 3).rule_index == 2
