''' author: samtenka
    change: 2020-04-02
    create: 2020-03-30
    descrp: Every tree a nonterminal derives within a depth bound, produced
            lazily and always in the same order, and the size of that set
            computed without building it.
    to use: type
                from enumerator import enumerate_exprs, count_exprs
                for tree in enumerate_exprs(G, 'Real', 3):
                    ...
                count_exprs(G, 'Real', 3)

            Here depth counts levels: a lone terminal needs max_depth 1, and
            `x + 1` needs 2.  Rules are tried in index order; under a rule
            with several children, the rightmost child runs fastest, like the
            last digit of an odometer.  Rules whose min-depth cannot fit are
            skipped without descending into them.
'''

from mindepth import mindepth_map
from nodes import construct

class ExpressionIterator:
    '''
        Restartable: each `iter` starts over from the first tree.  `len`
        gives the count without enumerating.
    '''

    def __init__(self, grammar, nt, max_depth):
        self.grammar = grammar
        self.nt = nt
        self.max_depth = max_depth
        self.dmap = mindepth_map(grammar)

    def __iter__(self):
        return self.exprs(self.nt, self.max_depth)

    def __len__(self):
        return count_exprs(self.grammar, self.nt, self.max_depth)

    def exprs(self, nt, max_depth):
        if max_depth < 1: return
        for r in self.grammar.rules_for(nt):
            if self.dmap[r] >= max_depth: continue
            for kids in self.products(self.grammar.child_types(r), max_depth-1):
                yield construct(self.grammar, r, kids)

    def products(self, types, max_depth):
        ''' child lists, leftmost slot slowest '''
        if not types:
            yield []
            return
        for first in self.exprs(types[0], max_depth):
            for rest in self.products(types[1:], max_depth):
                yield [first.copy()] + rest

def enumerate_exprs(grammar, nt, max_depth):
    return ExpressionIterator(grammar, nt, max_depth)

def count_exprs(grammar, nt, max_depth, memo=None):
    ''' sum over eligible rules of the product of their children's counts '''
    if memo is None:
        memo = {}
    if max_depth < 1:
        return 0
    key = (nt, max_depth)
    if key in memo:
        return memo[key]

    dmap = mindepth_map(grammar)
    total = 0
    for r in grammar.rules_for(nt):
        if dmap[r] >= max_depth: continue
        ways = 1
        for t in grammar.child_types(r):
            ways *= count_exprs(grammar, t, max_depth-1, memo)
            if not ways: break
        total += ways

    memo[key] = total
    return total

if __name__=='__main__':
    from utils import CC
    from forms import call
    from grammar import GrammarBuilder
    from interpreter import get_executable, str_from_expr

    G = (GrammarBuilder()
        .add('Real', call('+', 'Real', 'Real'))
        .literals('Real', [1, 2])
        .build())
    for t in enumerate_exprs(G, 'Real', 2):
        print(CC+'@P {}@D '.format(str_from_expr(get_executable(t, G))))
    print(CC+'count @O {} @D '.format(count_exprs(G, 'Real', 2)))
