''' author: samtenka
    change: 2020-04-02
    create: 2019-02-26
    descrp: Organize the ambient implementations that rule bodies may name.
    to use: To look up what a call head or terminal symbol refers to, type

                from resources import AmbientNamespace
                A = AmbientNamespace()
                found, impl = A.resolve('+')

            Operator symbols are checked first, then (in order) the modules of
            DEFAULT_MODULES.  Dictionaries passed to the constructor shadow
            everything else, so that a caller may supply its own primitives.

            numpy comes before math so that sin, exp and friends broadcast
            over arrays.  Note that max, min and sum then name numpy's
            reductions, whose second argument is an axis; use maximum and
            minimum for pairwise choice.
'''

import builtins
import math
import operator

import numpy as np

#=============================================================================#
#=====  0. OPERATOR SYMBOLS  =================================================#
#=============================================================================#

OPERATORS = {
    # arithmetic:
    '+'  : operator.add,
    '-'  : operator.sub,
    '*'  : operator.mul,
    '/'  : operator.truediv,
    '//' : operator.floordiv,
    '%'  : operator.mod,
    '^'  : operator.pow,
    '**' : operator.pow,
    # comparison:
    '<'  : operator.lt,
    '<=' : operator.le,
    '>'  : operator.gt,
    '>=' : operator.ge,
    '==' : operator.eq,
    '!=' : operator.ne,
    # logic:
    '&'  : operator.and_,
    '|'  : operator.or_,
    '!'  : operator.not_,
    'ifelse': lambda cond, a, b: a if cond else b,
}

INFIX = {
    '+', '-', '*', '/', '//', '%', '^', '**',
    '<', '<=', '>', '>=', '==', '!=', '&', '|',
}

DEFAULT_MODULES = [np, math, builtins]

#=============================================================================#
#=====  1. NAME RESOLUTION  ==================================================#
#=============================================================================#

class AmbientNamespace:
    ''' Resolve names against caller-supplied dictionaries, then operator
        symbols, then the attributes of DEFAULT_MODULES.
    '''

    def __init__(self, *namespaces, modules=None):
        self.namespaces = list(namespaces) + [OPERATORS]
        self.modules = DEFAULT_MODULES if modules is None else modules

    def resolve(self, name):
        for ns in self.namespaces:
            if name in ns:
                return True, ns[name]
        for module in self.modules:
            if hasattr(module, name):
                return True, getattr(module, name)
        return False, None

if __name__=='__main__':
    from utils import CC
    A = AmbientNamespace({'double': lambda a: 2*a})
    for nm in ['+', 'sin', 'abs', 'double', 'x']:
        found, impl = A.resolve(nm)
        print(CC+'@P {} @D -> {}'.format(nm.ljust(8), impl if found else '@R free @D '))
