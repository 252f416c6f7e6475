''' author: samtenka
    change: 2020-04-02
    create: 2019-06-12
    descrp: Helpers for ANSI screen coloration, timing, randomness, and the
            exception types through which the engine reports failure.
    to use: Import:
                from utils import CC, pre, status                   # ansi
                from utils import secs_endured                      # profiling
                from utils import reseed, bernoulli, uniform        # math
                from utils import GrammarError, ArityError          # maybe
            Or, run as is to see a pretty rainbow:
                python utils.py
'''

import time
import random
import numpy as np

#=============================================================================#
#=====  0. ANSI CONTROL FOR RICH OUTPUT TEXT =================================#
#=============================================================================#

#~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
#~~~~~~~~~~~~~  0.0 Define Text Modifier  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

class Colorizer(object):
    '''
        Text modifier class, used as in
            print(CC+'@R i am red @D ')
        where CC is an instance of this class.
    '''
    def __init__(self):

        #-------------  0.0.0 ANSI command abbreviations  --------------------#

        self.ANSI_by_name = {
            '@^ ': '\033[1A',                 # motion: up

            '@K ': '\033[38;2;000;000;000m',  # color: black
            '@A ': '\033[38;2;128;128;128m',  # color: gray
            '@W ': '\033[38;2;255;255;255m',  # color: white

            '@R ': '\033[38;2;240;032;032m',  # color: red
            '@O ': '\033[38;2;224;128;000m',  # color: orange
            '@Y ': '\033[38;2;255;224;000m',  # color: yellow

            '@G ': '\033[38;2;064;224;000m',  # color: green
            '@C ': '\033[38;2;000;192;192m',  # color: cyan

            '@B ': '\033[38;2;096;064;255m',  # color: blue
            '@P ': '\033[38;2;192;000;192m',  # color: purple
        }

        #-------------  0.0.1 default color is cyan  -------------------------#
        self.ANSI_by_name['@D '] = self.ANSI_by_name['@C ']

        self.text = ''

    #-----------------  0.0.2 define application to strings  -----------------#

    def __add__(self, rhs):
        ''' Transition method of type Colorizer -> String -> Colorizer '''
        assert type(rhs) == type(''), 'expected types (Colorizer + string)'
        for name, ansi in self.ANSI_by_name.items():
            rhs = rhs.replace(name, ansi)
        self.text += rhs
        return self

    def __str__(self):
        ''' Emission method of type Colorizer -> String '''
        rtrn = self.text
        self.text = ''
        return rtrn

#~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
#~~~~~~~~~~~~~  0.1 Global Initializations  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

CC = Colorizer()

#~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
#~~~~~~~~~~~~~  0.2 Styles for Special Message Types  ~~~~~~~~~~~~~~~~~~~~~~~~#

def pre(condition, message):
    ''' assert precondition; if fail, complain in red '''
    assert condition, CC+'@R '+message+'@D '

def status(message):
    ''' overwrite the previous console line with `message` '''
    print(CC+'@^ '+message+'@D ')

#=============================================================================#
#=====  1. TIME PROFILING  ===================================================#
#=============================================================================#

start_time = time.time()
secs_endured = lambda: (time.time()-start_time)

#=============================================================================#
#=====  2. MATH and RANDOMNESS  ==============================================#
#=============================================================================#

def reseed(s):
    random.seed(s)
    np.random.seed(s)

def bernoulli(p):
    return np.random.binomial(1, p)

def uniform(n):
    ''' a uniform draw from range(n) if `n` is an int, else from the sequence
        `n` itself
    '''
    if type(n) in [int, np.int64]:
        return np.random.randint(n)
    n = list(n)
    pre(n, 'cannot sample from an empty sequence')
    return n[np.random.randint(len(n))]

def weighted(items, weights):
    ''' draw one of `items` with probability proportional to `weights` '''
    probs = np.array(weights, dtype=float)
    probs = probs / probs.sum()
    return items[np.random.choice(len(items), p=probs)]

#=============================================================================#
#=====  3. SIMULATE MAYBE TYPES VIA EXCEPTIONS  ==============================#
#=============================================================================#

class EngineError(Exception):
    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

#~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
#~~~~~~~~~~~~~  3.0 Malformed Grammars and Misused Trees  ~~~~~~~~~~~~~~~~~~~~#

class GrammarError(EngineError): pass
class ArityError(EngineError): pass
class LocationError(EngineError): pass

#~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
#~~~~~~~~~~~~~  3.1 Evaluation Failures  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

class UnboundSymbolError(EngineError):
    def __init__(self, name):
        super().__init__('symbol `{}` is unbound'.format(name))
        self.name = name

class EvaluationError(EngineError):
    def __init__(self, rule_index, msg):
        super().__init__('rule {}: {}'.format(rule_index, msg))
        self.rule_index = rule_index

#~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#
#~~~~~~~~~~~~~  3.2 Infeasible Requests  ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~#

class DepthBudgetExceededError(EngineError): pass
class NoMatchingNodeError(EngineError): pass

def internal_assert(condition, message, error=EngineError):
    if not condition:
        raise error(message)

#=============================================================================#
#=====  4. ILLUSTRATE UTILITIES  =============================================#
#=============================================================================#

if __name__=='__main__':
    print(CC + '@D moo')

    print(CC + '@W moo')
    print(CC + '@A moo')
    print(CC + '@K moo')

    print(CC + '@R moo')
    print(CC + '@O moo')
    print(CC + '@Y moo')
    print(CC + '@G moo')
    print(CC + '@C moo')
    print(CC + '@B moo')
    print(CC + '@P moo')
