''' author: samtenka
    change: 2020-04-02
    create: 2019-02-26
    descrp: Small symbolic-regression sweeps showing the engine end to end:
            enumerate (or randomly sample) expressions, evaluate each on a
            batch of inputs, keep the best fit.
    to use: Run as is:
                python demo.py
            or import the sweeps:
                from demo import fit_by_enumeration, fit_by_sampling
'''

import numpy as np
import tqdm

from utils import CC, pre, status                       # ansi
from utils import secs_endured                          # profiling
from utils import EvaluationError                       # maybe

from forms import call, Symbol
from grammar import GrammarBuilder
from interpreter import build_symbol_table, evaluate, get_executable, str_from_expr
from enumerator import enumerate_exprs
from sampler import TreeSampler

def arithmetic_grammar():
    return (GrammarBuilder()
        .alternatives('Real',
            call('+', 'Real', 'Real'),
            call('*', 'Real', 'Real'),
            call('-', 'Real', 'Real'),
            Symbol('x'),
        )
        .literals('Real', [1, 2])
        .build())

def mse(tree, grammar, table, ys):
    ''' mean squared error, or inf when evaluation fails or blows up '''
    try:
        with np.errstate(all='ignore'):
            pred = np.asarray(evaluate(tree, grammar, table), dtype=float)
            loss = float(np.mean((np.broadcast_to(pred, ys.shape) - ys)**2))
    except EvaluationError:
        return np.inf
    return loss if np.isfinite(loss) else np.inf

def best_of(trees, grammar, xs, ys, var='x', namespaces=(), total=None,
            show_progress=False):
    table = build_symbol_table(grammar, *namespaces)
    pre(var in table.free, 'grammar has no free variable `{}`'.format(var))
    table[var] = xs

    best, best_loss = None, np.inf
    for tree in tqdm.tqdm(trees, total=total, disable=not show_progress):
        loss = mse(tree, grammar, table, ys)
        if loss < best_loss:
            best, best_loss = tree, loss
    return best, best_loss

def fit_by_enumeration(grammar, nt, max_depth, xs, ys, **kwargs):
    exprs = enumerate_exprs(grammar, nt, max_depth)
    return best_of(exprs, grammar, xs, ys, total=len(exprs), **kwargs)

def fit_by_sampling(grammar, nt, max_depth, xs, ys, nb_samples=1000, **kwargs):
    TS = TreeSampler(grammar)
    trees = (TS.sample_tree(nt, max_depth) for _ in range(nb_samples))
    return best_of(trees, grammar, xs, ys, total=nb_samples, **kwargs)

if __name__=='__main__':
    G = arithmetic_grammar()
    xs = np.linspace(-2.0, 2.0, 21)
    ys = xs*xs + 1

    print(CC+'@P enumerating...@D ')
    tree, loss = fit_by_enumeration(G, 'Real', 3, xs, ys, show_progress=True)
    print(CC+'best @O {} @D with loss @O {:.4f} @D '.format(
        str_from_expr(get_executable(tree, G)), loss
    ))

    print(CC+'@P sampling...@D ')
    tree, loss = fit_by_sampling(G, 'Real', 4, xs, ys, show_progress=True)
    print(CC+'best @O {} @D with loss @O {:.4f} @D '.format(
        str_from_expr(get_executable(tree, G)), loss
    ))
    status('done after {:.1f} seconds'.format(secs_endured()))
