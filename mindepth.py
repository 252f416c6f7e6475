''' author: samtenka
    change: 2020-04-02
    create: 2020-03-28
    descrp: For each rule, the least depth of any finite derivation tree rooted
            at that rule.  Terminals sit at depth 0; a rule with children sits
            one above the deepest of its slots, where each slot is filled as
            shallowly as that slot's nonterminal allows:

                d[i] = 1 + max over slots t of (min over rules r for t of d[r])

            Recursive grammars make this a fixpoint, found by relaxing from
            d = inf (terminals 0) until nothing moves.  A nonterminal none of
            whose rules escapes its own recursion stays at inf.
    to use:     from mindepth import mindepth_map, mindepth
                d = mindepth_map(G)         # numpy array, read-only, cached
                mindepth(G, 'Real')         # least depth of a 'Real' tree
'''

import weakref

import numpy as np

#=============================================================================#
#=====  0. RELAXATION  =======================================================#
#=============================================================================#

def slot_depth(grammar, d, nt):
    rules = grammar.rules_for(nt)
    return min(d[r] for r in rules) if rules else np.inf

def relax(grammar, d):
    ''' one Gauss-Seidel sweep of the recurrence; returns (new_d, changed) '''
    d = np.array(d, dtype=float)
    changed = False
    for rule in grammar:
        if not rule.arity:
            new = 0.0
        else:
            new = 1.0 + max(slot_depth(grammar, d, t) for t in rule.child_types)
        if new < d[rule.index]:
            d[rule.index] = new
            changed = True
    return d, changed

#=============================================================================#
#=====  1. FIXPOINT, MEMOIZED PER GRAMMAR  ===================================#
#=============================================================================#

_cache = weakref.WeakKeyDictionary()

def mindepth_map(grammar):
    if grammar in _cache:
        return _cache[grammar]

    d = np.full(len(grammar), np.inf)
    for _ in range(len(grammar)+1):
        d, changed = relax(grammar, d)
        if not changed: break

    d.flags.writeable = False
    _cache[grammar] = d
    return d

def mindepth(grammar, nt, d=None):
    if d is None:
        d = mindepth_map(grammar)
    return slot_depth(grammar, d, nt)

def unproductive(grammar, d=None):
    ''' nonterminals with no finite derivation at all '''
    if d is None:
        d = mindepth_map(grammar)
    return {
        nt for nt in grammar.nonterminals()
        if mindepth(grammar, nt, d)==np.inf
    }

if __name__=='__main__':
    from utils import CC
    from forms import call
    from grammar import GrammarBuilder

    G = (GrammarBuilder()
        .add('Real', call('+', 'Real', 'Real'))
        .add('Real', call('neg', 'Pos'))
        .literals('Pos', [1])
        .add('Loop', call('f', 'Loop'))
        .build())
    print(CC+'@P {}@D '.format(str(G)))
    print(CC+'min depths @O {} @D unproductive @R {} @D '.format(
        mindepth_map(G), unproductive(G)
    ))
