import pytest

from forms import call, Symbol, Literal
from grammar import Grammar, GrammarBuilder


@pytest.fixture
def plus_grammar():
    # 0: Real = Real + Real   1: Real = 1   2: Real = 2
    return Grammar([
        ('Real', call('+', 'Real', 'Real')),
        ('Real', Literal(1)),
        ('Real', Literal(2)),
    ])


@pytest.fixture
def arith_grammar():
    # 0: +  1: *  2: x  3: 1  4: 2
    return (GrammarBuilder()
        .alternatives('Real', call('+', 'Real', 'Real'), call('*', 'Real', 'Real'))
        .add('Real', Symbol('x'))
        .literals('Real', [1, 2])
        .build())


@pytest.fixture
def typed_grammar():
    # 0: Real = Real + Real   1: Real = float(Int)   2: Real = x
    # 3: Int = 1              4: Int = 2
    return Grammar([
        ('Real', call('+', 'Real', 'Real')),
        ('Real', call('float', 'Int')),
        ('Real', Symbol('x')),
        ('Int', Literal(1)),
        ('Int', Literal(2)),
    ])
