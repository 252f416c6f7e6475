''' author: samtenka
    change: 2020-04-02
    create: 2020-02-11
    descrp: the closed set of shapes a production rule's body may take, and a
            small explicit expression representation that trees compile to
    to use: To write rule bodies, import:

                from forms import Symbol, Literal, Call, EvalThunk, NonTerminalRef

            For example, the three alternatives of

                Real = x | 1 | Real + Real

            read, as forms,

                Symbol('x')
                Literal(1)
                Call('+', [NonTerminalRef('Real'), NonTerminalRef('Real')])

            A NonTerminalRef standing alone as a rule body is a unit production
            (Real = Int).  Compiled trees are Expr tuples built by lit, var and
            app.
'''

from collections import namedtuple

from utils import GrammarError, internal_assert # maybe

from resources import INFIX

#=============================================================================#
#=====  0. RECORD STRUCTURE FOR RULE FORMS  ==================================#
#=============================================================================#

class RuleForm:

    KINDS = ['symbol', 'literal', 'call', 'eval', 'ref']

    #~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
    #~~~~~~~~~  0.0 Constructors  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

    def __init__(self, kind, **kwargs):
        internal_assert(kind in RuleForm.KINDS,
            'unknown form kind `{}`'.format(kind), GrammarError
        )
        self.kind = kind
        if self.kind=='symbol':
            self.name = kwargs['name']
            internal_assert(type(self.name)==str and self.name,
                'symbol name must be a nonempty string', GrammarError
            )
        elif self.kind=='literal':
            self.value = kwargs['value']
        elif self.kind=='call':
            self.head = kwargs['head']
            self.args = tuple(kwargs['args'])
            internal_assert(type(self.head)==str and self.head,
                'call head must be a nonempty string', GrammarError
            )
            for a in self.args:
                internal_assert(
                    isinstance(a, RuleForm) and a.kind in ['ref', 'literal'],
                    'call argument `{}` is neither a nonterminal reference '
                    'nor a literal'.format(a), GrammarError
                )
        elif self.kind=='eval':
            self.thunk = kwargs['thunk']
            internal_assert(callable(self.thunk),
                'eval thunk must be callable', GrammarError
            )
        elif self.kind=='ref':
            self.nt = kwargs['nt']
            internal_assert(type(self.nt)==str and self.nt,
                'nonterminal must be a nonempty string', GrammarError
            )

    #~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
    #~~~~~~~~~  0.1 Structure  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

    def child_types(self):
        ''' the nonterminal of each child slot, in order '''
        if self.kind=='ref': return [self.nt]
        if self.kind=='call': return [a.nt for a in self.args if a.kind=='ref']
        return []

    def symbols(self):
        ''' names this form needs resolved at evaluation time '''
        if self.kind=='symbol': return [self.name]
        if self.kind=='call': return [self.head]
        return []

    #~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
    #~~~~~~~~~  0.2 Display  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

    def __repr__(self):
        if self.kind=='symbol':
            return self.name
        elif self.kind=='literal':
            return repr(self.value)
        elif self.kind=='call':
            return str_from_call(self.head, [repr(a) for a in self.args])
        elif self.kind=='eval':
            return 'eval({})'.format(getattr(self.thunk, '__name__', 'thunk'))
        elif self.kind=='ref':
            return self.nt

    def __eq__(self, rhs):
        return isinstance(rhs, RuleForm) and repr(self)==repr(rhs)

    def __hash__(self):
        return hash(repr(self))

def str_from_call(head, arg_strs):
    if head in INFIX and len(arg_strs)==2:
        return '({} {} {})'.format(arg_strs[0], head, arg_strs[1])
    return '{}({})'.format(head, ', '.join(arg_strs))

#~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
#~~~~~~~~~~~~~  0.3 Shorthands  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

Symbol          = lambda name:          RuleForm('symbol', name=name)
Literal         = lambda value:         RuleForm('literal', value=value)
Call            = lambda head, args:    RuleForm('call', head=head, args=args)
EvalThunk       = lambda thunk:         RuleForm('eval', thunk=thunk)
NonTerminalRef  = lambda nt:            RuleForm('ref', nt=nt)

def call(head, *args):
    ''' Call with light coercion: bare strings name nonterminals, other plain
        values become literals
    '''
    return Call(head, [
        a if isinstance(a, RuleForm) else
        NonTerminalRef(a) if type(a)==str else
        Literal(a)
        for a in args
    ])

def as_form(body):
    ''' rule bodies given as plain values: strings are symbols, else literals '''
    if isinstance(body, RuleForm): return body
    if type(body)==str: return Symbol(body)
    return Literal(body)

#=============================================================================#
#=====  1. COMPILED EXPRESSIONS  =============================================#
#=============================================================================#

# kind is one of 'lit', 'var', 'call'; origin is the rule index a call came from
Expr = namedtuple('Expr', ['kind', 'value', 'args', 'origin'])

lit  = lambda value:                Expr('lit', value, (), None)
var  = lambda name:                 Expr('var', name, (), None)
app  = lambda head, args, origin:   Expr('call', head, tuple(args), origin)
