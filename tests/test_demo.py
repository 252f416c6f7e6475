import numpy as np

from demo import arithmetic_grammar, best_of, fit_by_enumeration, fit_by_sampling
from forms import call, Symbol
from grammar import Grammar
from interpreter import build_symbol_table, evaluate
from nodes import construct
from utils import reseed


def test_enumeration_finds_exact_fit():
    G = arithmetic_grammar()
    xs = np.linspace(-1.0, 1.0, 9)

    tree, loss = fit_by_enumeration(G, 'Real', 3, xs, xs * xs + 1)

    assert loss == 0.0
    table = build_symbol_table(G).bind(x=xs)
    assert np.allclose(evaluate(tree, G, table), xs * xs + 1)


def test_sampling_returns_finite_fit():
    reseed(0)
    G = arithmetic_grammar()
    xs = np.linspace(-1.0, 1.0, 9)

    tree, loss = fit_by_sampling(G, 'Real', 3, xs, 2 * xs, nb_samples=200)

    assert tree is not None
    assert np.isfinite(loss)


def test_failing_candidates_are_skipped():
    def boom(a):
        raise RuntimeError('boom')

    G = Grammar([
        ('Real', call('boom', 'Real')),
        ('Real', Symbol('x')),
    ])
    xs = np.arange(3.0)
    bad = construct(G, 0, [construct(G, 1)])
    good = construct(G, 1)

    tree, loss = best_of([bad, good], G, xs, xs, namespaces=({'boom': boom},))

    assert tree is good
    assert loss == 0.0


def test_module_functions_score_on_array_inputs():
    G = Grammar([
        ('Real', call('sin', 'Real')),
        ('Real', Symbol('x')),
    ])
    xs = np.linspace(0.0, 3.0, 7)

    tree, loss = fit_by_enumeration(G, 'Real', 2, xs, np.sin(xs))

    assert tree.rule_index == 0
    assert loss == 0.0
