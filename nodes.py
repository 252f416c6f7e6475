''' author: samtenka
    change: 2020-04-02
    create: 2019-02-26
    descrp: Derivation trees over a grammar, plus lightweight handles (NodeLoc)
            naming a place in a tree so that a subtree may be read or swapped
            without searching from the root again.
    to use: Build trees bottom-up with construct:

                from nodes import construct, NodeLoc, get, replace
                leaf = construct(G, 1)
                tree = construct(G, 0, [leaf, construct(G, 2)])

            A NodeLoc is a (parent, idx) pair; idx None means "the parent node
            itself", which is how the root is addressed:

                replace(tree, NodeLoc(tree, 1), construct(G, 1))
                get(tree, NodeLoc(tree, None)) is tree          # True

            A location is not an owning reference: once the tree is edited at
            or above it, it should be thrown away.
'''

from collections import namedtuple

import numpy as np

from utils import ArityError, LocationError, internal_assert # maybe

#=============================================================================#
#=====  0. TREE NODES  =======================================================#
#=============================================================================#

class RuleNode:
    '''
        One rule application.  `children` are exclusively owned; `value` holds
        the realized result of an eval-thunk rule (None for other rules).
    '''

    def __init__(self, rule_index, children=(), value=None):
        self.rule_index = rule_index
        self.children = list(children)
        self.value = value

    def copy(self):
        ''' deep copy; cached eval values are carried over, never recomputed '''
        return RuleNode(
            self.rule_index, [c.copy() for c in self.children], self.value
        )

    def __eq__(self, rhs):
        return (
            isinstance(rhs, RuleNode) and
            self.rule_index == rhs.rule_index and
            same_value(self.value, rhs.value) and
            self.children == rhs.children
        )

    def __hash__(self):
        return hash((self.rule_index, tuple(hash(c) for c in self.children)))

    def __repr__(self):
        if not self.children:
            return 'RuleNode({})'.format(self.rule_index)
        return 'RuleNode({}, {})'.format(self.rule_index, self.children)

def same_value(a, b):
    ''' eval values may be numpy arrays, whose == is elementwise '''
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    return a == b

def construct(grammar, rule_index, children=()):
    children = list(children)
    arity = grammar.arity(rule_index)
    internal_assert(len(children)==arity,
        'rule {} takes {} children but got {}'.format(
            rule_index, arity, len(children)
        ), ArityError
    )
    value = None
    if grammar.is_eval(rule_index):
        value = grammar[rule_index].form.thunk()
    return RuleNode(rule_index, children, value)

#=============================================================================#
#=====  1. TRAVERSAL and MEASUREMENT  ========================================#
#=============================================================================#

def iter_nodes(tree):
    ''' pre-order, leftmost child first '''
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))

def walk(tree):
    ''' pre-order (depth, rule_index) pairs, for external display tooling '''
    stack = [(0, tree)]
    while stack:
        d, node = stack.pop()
        yield d, node.rule_index
        stack.extend((d+1, c) for c in reversed(node.children))

def depth(tree):
    if not tree.children:
        return 0
    return 1 + max(depth(c) for c in tree.children)

def size(tree):
    return sum(1 for _ in iter_nodes(tree))

def node_depth(tree, node):
    ''' number of edges from `tree` down to `node` (found by identity) '''
    stack = [(0, tree)]
    while stack:
        d, n = stack.pop()
        if n is node: return d
        stack.extend((d+1, c) for c in n.children)
    raise LocationError('node does not belong to tree')

def contains_type(tree, grammar, nt):
    return any(grammar.return_type(n.rule_index)==nt for n in iter_nodes(tree))

def str_from_tree(tree, grammar):
    ''' one line per node, indented by depth '''
    lines = []
    stack = [(0, tree)]
    while stack:
        d, node = stack.pop()
        rule = grammar[node.rule_index]
        line = '{}{} = {}'.format('  '*d, rule.lhs, repr(rule.form))
        if rule.form.kind=='eval':
            line += '  -> {}'.format(repr(node.value))
        lines.append(line)
        stack.extend((d+1, c) for c in reversed(node.children))
    return '\n'.join(lines)

#=============================================================================#
#=====  2. LOCATIONS  ========================================================#
#=============================================================================#

NodeLoc = namedtuple('NodeLoc', ['parent', 'idx'])

root_loc = lambda tree: NodeLoc(tree, None)

def iter_locations(tree):
    ''' pre-order locations, starting with the root '''
    yield root_loc(tree)
    for node in iter_nodes(tree):
        for i in range(len(node.children)):
            yield NodeLoc(node, i)

def check_location(loc):
    internal_assert(isinstance(loc, NodeLoc), 'expected a NodeLoc', LocationError)
    internal_assert(
        loc.idx is None or 0 <= loc.idx < len(loc.parent.children),
        'child index {} out of range'.format(loc.idx), LocationError
    )

def get(tree, loc):
    check_location(loc)
    if loc.idx is None:
        return loc.parent
    return loc.parent.children[loc.idx]

def replace(tree, loc, new_subtree):
    '''
        Attach `new_subtree` at `loc` and return the (possibly edited) root.
        The old subtree is dropped.  Replacing at an idx-None location rewrites
        that node in place, so existing references to the root stay valid; in
        that case `new_subtree`'s own node is consumed and should not be reused.

        `new_subtree` may reuse nodes from the subtree it replaces (hoisting a
        descendant, or wrapping the old occupant) but no node that stays in
        the tree elsewhere.
    '''
    check_location(loc)
    owned = {id(n) for n in iter_nodes(tree)}
    internal_assert(id(loc.parent) in owned,
        'location does not point into this tree', LocationError
    )
    target = get(tree, loc)
    if new_subtree is target:
        return tree

    released = {id(n) for n in iter_nodes(target)}
    if loc.idx is None:
        released.discard(id(target))
    kept = owned - released
    internal_assert(all(id(n) not in kept for n in iter_nodes(new_subtree)),
        'replacement shares nodes with the rest of this tree', LocationError
    )
    if loc.idx is None:
        loc.parent.rule_index = new_subtree.rule_index
        loc.parent.children = list(new_subtree.children)
        loc.parent.value = new_subtree.value
    else:
        loc.parent.children[loc.idx] = new_subtree
    return tree
