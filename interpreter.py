''' author: samtenka
    change: 2020-04-02
    create: 2019-02-26
    descrp: Evaluate derivation trees.  The fast path walks the tree directly,
            looking names up in a SymbolTable; the slow path first compiles the
            tree to an explicit Expr and then evaluates that.  Both paths agree
            on values and on the errors they raise.
    to use: Build a table once per grammar, bind the free variables, evaluate:

                from interpreter import build_symbol_table, evaluate
                T = build_symbol_table(G)
                T.free                                  # e.g. {'x'}
                T.bind(x=3.0)
                evaluate(tree, G, T)

            To see or reuse the compiled form:

                e = get_executable(tree, G)
                str_from_expr(e)                        # e.g. '(x + 1)'
                eval_expr(e, T)
'''

from utils import pre                                   # ansi
from utils import UnboundSymbolError, EvaluationError   # maybe

from forms import lit, var, app, str_from_call
from resources import AmbientNamespace

#=============================================================================#
#=====  0. SYMBOL TABLE  =====================================================#
#=============================================================================#

class SymbolTable(dict):
    '''
        name -> implementation or value.  `free` records the names no
        namespace could resolve; they must be bound before evaluation.
    '''

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.free = set()

    def bind(self, **values):
        self.update(values)
        return self

    def unbound(self):
        return {nm for nm in self.free if nm not in self}

def build_symbol_table(grammar, *namespaces, modules=None):
    ambient = AmbientNamespace(*namespaces, modules=modules)
    table = SymbolTable()
    for rule in grammar:
        for nm in rule.form.symbols():
            if nm in table or nm in table.free: continue
            found, impl = ambient.resolve(nm)
            if found:
                table[nm] = impl
            else:
                table.free.add(nm)
    return table

def lookup(table, name):
    if name not in table:
        raise UnboundSymbolError(name)
    return table[name]

def invoke(impl, args, rule_index):
    try:
        return impl(*args)
    except Exception as e:
        raise EvaluationError(rule_index, '{} raised {}: {}'.format(
            getattr(impl, '__name__', repr(impl)), type(e).__name__, e
        )) from e

#=============================================================================#
#=====  1. FAST PATH: WALK THE TREE  =========================================#
#=============================================================================#

def evaluate(tree, grammar, table):
    form = grammar[tree.rule_index].form
    if form.kind=='literal':
        return form.value
    elif form.kind=='symbol':
        return lookup(table, form.name)
    elif form.kind=='eval':
        return tree.value
    elif form.kind=='ref':
        return evaluate(tree.children[0], grammar, table)
    elif form.kind=='call':
        impl = lookup(table, form.head)
        kids = iter(tree.children)
        args = [
            evaluate(next(kids), grammar, table) if a.kind=='ref' else a.value
            for a in form.args
        ]
        return invoke(impl, args, tree.rule_index)
    pre(False, 'unknown form kind `{}`'.format(form.kind))

def interpret(tree, grammar, **bindings):
    ''' one-off evaluation; build a SymbolTable yourself when evaluating many
        trees over the same grammar
    '''
    table = build_symbol_table(grammar).bind(**bindings)
    return evaluate(tree, grammar, table)

#=============================================================================#
#=====  2. SLOW PATH: COMPILE, THEN EVALUATE  ================================#
#=============================================================================#

def get_executable(tree, grammar):
    form = grammar[tree.rule_index].form
    if form.kind=='literal':
        return lit(form.value)
    elif form.kind=='symbol':
        return var(form.name)
    elif form.kind=='eval':
        return lit(tree.value)
    elif form.kind=='ref':
        return get_executable(tree.children[0], grammar)
    elif form.kind=='call':
        kids = iter(tree.children)
        return app(form.head, [
            get_executable(next(kids), grammar) if a.kind=='ref' else lit(a.value)
            for a in form.args
        ], tree.rule_index)
    pre(False, 'unknown form kind `{}`'.format(form.kind))

def eval_expr(expr, table):
    if expr.kind=='lit':
        return expr.value
    elif expr.kind=='var':
        return lookup(table, expr.value)
    elif expr.kind=='call':
        impl = lookup(table, expr.value)
        args = [eval_expr(a, table) for a in expr.args]
        return invoke(impl, args, expr.origin)
    pre(False, 'unknown expression kind `{}`'.format(expr.kind))

def str_from_expr(expr):
    if expr.kind=='lit':
        return repr(expr.value)
    elif expr.kind=='var':
        return expr.value
    return str_from_call(expr.value, [str_from_expr(a) for a in expr.args])

if __name__=='__main__':
    from utils import CC
    from forms import call, Symbol
    from grammar import GrammarBuilder
    from nodes import construct

    G = (GrammarBuilder()
        .alternatives('Real', call('+', 'Real', 'Real'), call('sin', 'Real'))
        .add('Real', Symbol('x'))
        .literals('Real', [1, 2])
        .build())
    T = build_symbol_table(G).bind(x=0.5)
    tree = construct(G, 0, [construct(G, 1, [construct(G, 2)]), construct(G, 4)])
    e = get_executable(tree, G)
    print(CC+'@P {} @D = @O {} @D (slow: @O {} @D )'.format(
        str_from_expr(e), evaluate(tree, G, T), eval_expr(e, T)
    ))
