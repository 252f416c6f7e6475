import numpy as np
import pytest

from forms import call, EvalThunk, Literal
from grammar import Grammar
from nodes import (
    NodeLoc,
    RuleNode,
    construct,
    contains_type,
    depth,
    get,
    iter_nodes,
    node_depth,
    replace,
    root_loc,
    size,
    str_from_tree,
    walk,
)
from utils import ArityError, LocationError


def plus(G, a, b):
    return construct(G, 0, [a, b])


def one(G):
    return construct(G, 1)


def two(G):
    return construct(G, 2)


def test_construct_checks_arity(plus_grammar):
    G = plus_grammar

    with pytest.raises(ArityError):
        construct(G, 0, [one(G)])
    with pytest.raises(ArityError):
        construct(G, 1, [one(G)])

    node = plus(G, one(G), two(G))
    assert G.arity(node.rule_index) == len(node.children)


def test_eval_thunk_runs_once_per_node():
    calls = []

    def draw():
        calls.append(1)
        return len(calls)

    G = Grammar([('Real', EvalThunk(draw))])
    a = construct(G, 0)
    b = construct(G, 0)

    assert (a.value, b.value) == (1, 2)
    copied = a.copy()
    assert copied.value == 1
    assert len(calls) == 2


def test_trees_with_array_values_compare_structurally():
    G = Grammar([
        ('Vec', call('+', 'Vec', 'Vec')),
        ('Vec', EvalThunk(lambda: np.random.rand(3))),
    ])
    a = construct(G, 1)
    b = construct(G, 1)
    tree = construct(G, 0, [a, b])

    assert a == a.copy()
    assert tree == tree.copy()
    assert a != b
    assert len({tree, tree.copy()}) == 1


def test_depth_and_size(plus_grammar):
    G = plus_grammar
    leaf = one(G)
    tree = plus(G, plus(G, one(G), two(G)), two(G))

    assert depth(leaf) == 0
    assert size(leaf) == 1
    assert depth(tree) == 2
    assert size(tree) == 5


def test_walk_is_preorder_with_depths(plus_grammar):
    G = plus_grammar
    tree = plus(G, plus(G, one(G), two(G)), two(G))

    assert list(walk(tree)) == [(0, 0), (1, 0), (2, 1), (2, 2), (1, 2)]
    assert [n.rule_index for n in iter_nodes(tree)] == [0, 0, 1, 2, 2]


def test_structural_equality_and_copy(plus_grammar):
    G = plus_grammar
    tree = plus(G, one(G), two(G))
    clone = tree.copy()

    assert clone == tree
    assert hash(clone) == hash(tree)
    assert clone is not tree
    assert clone.children[0] is not tree.children[0]
    assert tree != plus(G, two(G), one(G))


def test_get_and_replace_child(plus_grammar):
    G = plus_grammar
    tree = plus(G, one(G), two(G))
    loc = NodeLoc(tree, 1)

    assert get(tree, loc) is tree.children[1]
    out = replace(tree, loc, plus(G, one(G), one(G)))

    assert out is tree
    assert tree == plus(G, one(G), plus(G, one(G), one(G)))


def test_replace_at_root_keeps_root_reference(plus_grammar):
    G = plus_grammar
    tree = plus(G, one(G), two(G))
    out = replace(tree, root_loc(tree), two(G))

    assert out is tree
    assert tree == two(G)
    assert tree.children == []


def test_reattaching_the_same_subtree_is_a_no_op(plus_grammar):
    G = plus_grammar
    tree = plus(G, plus(G, one(G), two(G)), two(G))
    before = tree.copy()

    for loc in [root_loc(tree), NodeLoc(tree, 0), NodeLoc(tree.children[0], 1)]:
        replace(tree, loc, get(tree, loc))
        assert tree == before


def test_replace_rejects_foreign_and_bad_locations(plus_grammar):
    G = plus_grammar
    tree = plus(G, one(G), two(G))
    other = plus(G, one(G), one(G))

    with pytest.raises(LocationError):
        replace(tree, NodeLoc(other, 0), two(G))
    with pytest.raises(LocationError):
        replace(tree, NodeLoc(tree, 2), two(G))
    with pytest.raises(LocationError):
        get(tree, NodeLoc(tree.children[0], 0))
    with pytest.raises(LocationError):
        replace(tree, (tree, 0), two(G))


def test_replace_hoists_a_descendant(plus_grammar):
    G = plus_grammar
    tree = plus(G, plus(G, one(G), two(G)), two(G))
    replace(tree, NodeLoc(tree, 0), tree.children[0].children[1])

    assert tree == plus(G, two(G), two(G))

    tree = plus(G, plus(G, one(G), two(G)), two(G))
    kept = tree.children[0].children
    replace(tree, root_loc(tree), tree.children[0])

    assert tree == plus(G, one(G), two(G))
    assert tree.children[0] is kept[0]
    ids = [id(n) for n in iter_nodes(tree)]
    assert len(ids) == len(set(ids))


def test_replace_may_wrap_the_old_occupant(plus_grammar):
    G = plus_grammar
    tree = plus(G, one(G), two(G))
    old = tree.children[1]
    replace(tree, NodeLoc(tree, 1), plus(G, old, one(G)))

    assert tree == plus(G, one(G), plus(G, two(G), one(G)))
    assert tree.children[1].children[0] is old


def test_replace_rejects_nodes_kept_elsewhere_in_tree(plus_grammar):
    G = plus_grammar
    tree = plus(G, one(G), two(G))
    before = tree.copy()

    with pytest.raises(LocationError):
        replace(tree, NodeLoc(tree, 1), tree.children[0])
    with pytest.raises(LocationError):
        replace(tree, NodeLoc(tree, 1), plus(G, tree.children[0], one(G)))
    with pytest.raises(LocationError):
        replace(tree, NodeLoc(tree, 0), tree)
    with pytest.raises(LocationError):
        replace(tree, root_loc(tree), plus(G, tree, one(G)))

    assert tree == before
    assert size(tree) == len({id(n) for n in iter_nodes(tree)})


def test_node_depth(plus_grammar):
    G = plus_grammar
    inner = plus(G, one(G), two(G))
    tree = plus(G, inner, two(G))

    assert node_depth(tree, tree) == 0
    assert node_depth(tree, inner) == 1
    assert node_depth(tree, inner.children[1]) == 2
    with pytest.raises(LocationError):
        node_depth(tree, one(G))


def test_contains_type_and_display(typed_grammar):
    G = typed_grammar
    tree = construct(G, 0, [construct(G, 2), construct(G, 1, [construct(G, 3)])])

    assert contains_type(tree, G, 'Int')
    assert not contains_type(construct(G, 2), G, 'Int')
    assert str_from_tree(tree, G).splitlines() == [
        'Real = (Real + Real)',
        '  Real = x',
        '  Real = float(Int)',
        '    Int = 1',
    ]


def test_rulenode_repr():
    assert repr(RuleNode(3)) == 'RuleNode(3)'
    assert repr(RuleNode(0, [RuleNode(1)])) == 'RuleNode(0, [RuleNode(1)])'
