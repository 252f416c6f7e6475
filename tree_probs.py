''' author: samtenka
    change: 2020-04-02
    create: 2019-03-21
    descrp: log-probability that the top-down sampler grows a given tree
    to use: type
                from tree_probs import TreePrior
                TP = TreePrior(G)
                TP.log_prior(tree, max_depth=4)

            The value counts rule choices only: whatever an eval-thunk rule
            draws when its node is built is not scored.  Trees the sampler
            could not produce within the budget score -inf.
'''

import numpy as np

from sampler import TreeSampler

class TreePrior:
    def __init__(self, grammar, weights=None):
        self.grammar = grammar
        self.sampler = TreeSampler(grammar, weights=weights)

    def log_prior(self, tree, max_depth, nt=None):
        if nt is None:
            nt = self.grammar.return_type(tree.rule_index)
        return self.log_prior_inner(tree, nt, max_depth)

    def log_choice(self, r, feasible):
        weights = self.sampler.weights
        if weights is None:
            return -np.log(len(feasible))
        w = weights.get(r, 1.0)
        return np.log(w) - np.log(sum(weights.get(f, 1.0) for f in feasible))

    def log_prior_inner(self, tree, nt, budget):
        r = tree.rule_index
        if self.grammar.return_type(r)!=nt:
            return -np.inf
        feasible = self.sampler.feasible_rules(nt, budget)
        if r not in feasible:
            return -np.inf

        accum = self.log_choice(r, feasible)
        for child, t in zip(tree.children, self.grammar.child_types(r)):
            accum += self.log_prior_inner(child, t, budget-1)
        return accum

if __name__=='__main__':
    from utils import CC, reseed
    from forms import call, Symbol
    from grammar import GrammarBuilder
    from sampler import generate_random_tree
    from nodes import size

    reseed(1)
    G = (GrammarBuilder()
        .alternatives('Real', call('+', 'Real', 'Real'), Symbol('x'))
        .literals('Real', [1, 2])
        .build())
    TP = TreePrior(G)
    for _ in range(5):
        t = generate_random_tree(G, 'Real', 3)
        print(CC+'log prior: [@O {:8.2f}@D ] for [{:3}] nodes'.format(
            TP.log_prior(t, 3), size(t)
        ))
