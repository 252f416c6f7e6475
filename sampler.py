''' author: samtenka
    change: 2020-04-02
    create: 2020-03-12
    descrp: Random trees and random places in trees.  Nodes and locations are
            drawn uniformly in one pass by reservoir sampling (the k-th
            candidate seen displaces the current pick with probability 1/k),
            so no count of the tree is needed up front.  Fresh trees are grown
            top-down, choosing at each node among those rules whose min-depth
            fits the remaining budget.
    to use: type
                from sampler import generate_random_tree, sample_location
                t = generate_random_tree(G, 'Real', max_depth=4)
                loc = sample_location(t, 'Real', G)
                replace(t, loc, generate_random_tree(G, 'Real', 2))
'''

from utils import pre                                           # ansi
from utils import bernoulli, uniform, weighted                  # math
from utils import DepthBudgetExceededError, NoMatchingNodeError # maybe
from utils import internal_assert                               # maybe

from mindepth import mindepth_map, mindepth
from nodes import construct, iter_nodes, iter_locations

#=============================================================================#
#=====  0. UNIFORM NODES and LOCATIONS  ======================================#
#=============================================================================#

def reservoir(candidates):
    ''' uniform draw from an iterable of unknown length; (pick, count) '''
    chosen, k = None, 0
    for c in candidates:
        k += 1
        if bernoulli(1.0/k):
            chosen = c
    return chosen, k

def type_filter(nt, grammar):
    pre((nt is None) == (grammar is None),
        'filtering by type needs both a nonterminal and a grammar'
    )
    if nt is None:
        return lambda node: True
    return lambda node: grammar.return_type(node.rule_index)==nt

def sample_node(tree, nt=None, grammar=None):
    keep = type_filter(nt, grammar)
    chosen, k = reservoir(n for n in iter_nodes(tree) if keep(n))
    internal_assert(k, 'no node of type `{}` in tree'.format(nt),
        NoMatchingNodeError
    )
    return chosen

def sample_location(tree, nt=None, grammar=None):
    keep = type_filter(nt, grammar)
    occupant = lambda loc: (
        loc.parent if loc.idx is None else loc.parent.children[loc.idx]
    )
    chosen, k = reservoir(
        loc for loc in iter_locations(tree) if keep(occupant(loc))
    )
    internal_assert(k, 'no node of type `{}` in tree'.format(nt),
        NoMatchingNodeError
    )
    return chosen

#=============================================================================#
#=====  1. RANDOM TREES  =====================================================#
#=============================================================================#

class TreeSampler:
    '''
        Grow trees top-down.  Among the rules for the wanted nonterminal whose
        min-depth fits the remaining budget, pick uniformly, or in proportion
        to `weights` (rule index -> positive float) when given.
    '''

    def __init__(self, grammar, weights=None):
        self.grammar = grammar
        self.dmap = mindepth_map(grammar)
        self.weights = weights

    def feasible_rules(self, nt, budget):
        return [r for r in self.grammar.rules_for(nt) if self.dmap[r] <= budget]

    def sample_rule(self, nt, budget):
        rules = self.feasible_rules(nt, budget)
        if self.weights is None:
            return uniform(rules)
        return weighted(rules, [self.weights.get(r, 1.0) for r in rules])

    def sample_tree(self, nt, max_depth):
        least = mindepth(self.grammar, nt, self.dmap)
        internal_assert(least <= max_depth,
            '`{}` needs depth {} but budget is {}'.format(nt, least, max_depth),
            DepthBudgetExceededError
        )
        return self.grow(nt, max_depth)

    def grow(self, nt, budget):
        r = self.sample_rule(nt, budget)
        children = [
            self.grow(t, budget-1) for t in self.grammar.child_types(r)
        ]
        return construct(self.grammar, r, children)

def generate_random_tree(grammar, nt, max_depth):
    return TreeSampler(grammar).sample_tree(nt, max_depth)

if __name__=='__main__':
    from utils import CC, reseed
    from forms import call, Symbol
    from grammar import GrammarBuilder
    from nodes import str_from_tree, depth

    reseed(0)
    G = (GrammarBuilder()
        .alternatives('Real', call('+', 'Real', 'Real'), call('*', 'Real', 'Real'))
        .add('Real', Symbol('x'))
        .literals('Real', range(1, 4))
        .build())
    for _ in range(3):
        t = generate_random_tree(G, 'Real', 3)
        print(CC+'@O depth {} @D \n{}'.format(depth(t), str_from_tree(t, G)))
