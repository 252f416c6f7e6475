''' author: samtenka
    change: 2020-04-02
    create: 2019-02-25
    descrp: an immutable, indexed collection of production rules
    to use: Build a grammar either from a flat list of (lhs, form) pairs

                from grammar import Grammar
                from forms import call, Literal, Symbol
                G = Grammar([
                    ('Real', call('+', 'Real', 'Real')),
                    ('Real', Literal(1)),
                    ('Real', Symbol('x')),
                ])

            or with the builder, which expands alternatives and bulk literals:

                G = (GrammarBuilder()
                    .alternatives('Real', call('+', 'Real', 'Real'), 'x')
                    .literals('Real', range(1, 10))
                    .build())

            Rules are identified by their position in the list.  All queries
            (G.rules_for('Real'), G.arity(0), ...) read precomputed indices.
'''

from collections import namedtuple

from utils import GrammarError, internal_assert # maybe

from containers import ListByKey
from forms import RuleForm, as_form

Rule = namedtuple('Rule', ['index', 'lhs', 'form', 'arity', 'child_types'])

class Grammar:
    def __init__(self, rule_specs):
        rule_specs = list(rule_specs)
        internal_assert(rule_specs, 'grammar has no rules', GrammarError)

        self.indices_by_nt = ListByKey()
        for i, spec in enumerate(rule_specs):
            internal_assert(type(spec) in [tuple, list] and len(spec) in [2, 3],
                'rule {} is not an (lhs, form[, arity]) triple'.format(i),
                GrammarError
            )
            lhs, form = spec[0], spec[1]
            internal_assert(type(lhs)==str and lhs,
                'rule {} has malformed lhs `{}`'.format(i, lhs), GrammarError
            )
            internal_assert(isinstance(form, RuleForm),
                'rule {} has malformed body `{}`'.format(i, form), GrammarError
            )
            self.indices_by_nt.add(lhs, i)

        self.rules = tuple(
            self.make_rule(i, *spec) for i, spec in enumerate(rule_specs)
        )
        self._max_arity = max(r.arity for r in self.rules)

    def make_rule(self, i, lhs, form, declared_arity=None):
        ''' Validate one rule against the whole grammar.  A front-end may
            state the arity it expects; it must agree with the form's slots.
        '''
        child_types = tuple(form.child_types())
        for nt in child_types:
            internal_assert(nt in self.indices_by_nt,
                'rule {} refers to `{}`, which no rule produces'.format(i, nt),
                GrammarError
            )
        for nm in form.symbols():
            internal_assert(nm not in self.indices_by_nt or form.kind=='call',
                'rule {} uses nonterminal `{}` as a terminal symbol; write it '
                'as NonTerminalRef'.format(i, nm), GrammarError
            )

        arity = len(child_types)
        if declared_arity is not None:
            internal_assert(declared_arity==arity,
                'rule {} declares arity {} but its form has {} child '
                'slots'.format(i, declared_arity, arity), GrammarError
            )
        return Rule(index=i, lhs=lhs, form=form, arity=arity,
                    child_types=child_types)

    #=========================================================================#
    #=  0. STRUCTURAL QUERIES  ===============================================#
    #=========================================================================#

    def nonterminals(self):
        return set(self.indices_by_nt.keys())

    def rules_for(self, nt):
        return self.indices_by_nt.at(nt)

    def return_type(self, i):
        return self.rules[i].lhs

    def arity(self, i):
        return self.rules[i].arity

    def child_types(self, i):
        return list(self.rules[i].child_types)

    def is_terminal(self, i):
        return self.rules[i].arity==0 and self.rules[i].form.kind!='eval'

    def is_eval(self, i):
        return self.rules[i].form.kind=='eval'

    def max_arity(self):
        return self._max_arity

    #=========================================================================#
    #=  1. CONTAINER PROTOCOL and DISPLAY  ===================================#
    #=========================================================================#

    def __len__(self):
        return len(self.rules)

    def __getitem__(self, i):
        return self.rules[i]

    def __iter__(self):
        return iter(self.rules)

    def __str__(self):
        return '\n'.join(
            '{}: {} = {}'.format(r.index, r.lhs, repr(r.form))
            for r in self.rules
        )

class GrammarBuilder:
    '''
        Accumulate the flat (lhs, form) list that Grammar consumes.  This is
        where shorthand (several alternatives at once, runs of literals) gets
        expanded.
    '''

    def __init__(self):
        self.specs = []

    def add(self, lhs, form):
        self.specs.append((lhs, as_form(form)))
        return self

    def alternatives(self, lhs, *forms):
        for form in forms:
            self.add(lhs, form)
        return self

    def literals(self, lhs, values):
        for v in values:
            self.add(lhs, RuleForm('literal', value=v))
        return self

    def build(self):
        return Grammar(self.specs)

if __name__=='__main__':
    from utils import CC
    from forms import call, Symbol

    G = (GrammarBuilder()
        .alternatives('Real', call('+', 'Real', 'Real'), call('*', 'Real', 'Real'))
        .add('Real', Symbol('x'))
        .literals('Real', range(1, 4))
        .build())
    print(CC+'@P {} @D '.format(str(G)))
    print(CC+'nonterminals @O {} @D max arity @O {} @D '.format(
        G.nonterminals(), G.max_arity()
    ))
