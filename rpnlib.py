#!/usr/bin/env python
"""rpnlib - Stuff used by rpn"""

# ---------------------------
#  The Process in a Nutshell
# ---------------------------
#
#             +------------+                  +----------+
# [input] >>> | tokenize() | >>> (variable, >>> | to_rpn() | >>> [postfix]
#          |  +------------+      tokens)     +----------+  |
#          |                                                |
#        string                                     tokens in RPN
#
# parse_input() runs both and hands back (variable, result), where result is
# either an Expression or the ConversionError that stopped the conversion.

import re
from enum import Enum

class ConversionError(ValueError):
    pass

class UnmatchedCommaError(ConversionError):
    def __init__(self):
        ConversionError.__init__(self, "Malformed Expression, comma but no Parenthesis")

class UnmatchedCloseError(ConversionError):
    def __init__(self):
        ConversionError.__init__(self, "Malformed Expression, found a ) without (")

class UnmatchedOpenError(ConversionError):
    def __init__(self):
        ConversionError.__init__(self, "Malformed Expression, found a ( without )")

class UnknownTokenError(ConversionError):
    def __init__(self, text):
        ConversionError.__init__(self,
            "You either misspelled a function, or it is not yet implemented. "
            "The unknown string was: %s" % text)
        self.text = text

class ForeignTokenError(ConversionError):
    def __init__(self, obj):
        ConversionError.__init__(self, "found foreign object: %r" % (obj,))

class Operator(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'
    MOD = '%'
    NEGATE = 'neg'

    def __str__(self):
        return self.value

class Token(object):
    """The base class for tokens.

    Do not instantiate this class directly; use one of the subclasses.
    A token is built once and never changed afterwards; two tokens are
    equal when they are of the same kind and carry the same text.
    """
    __slots__ = ('_text',)

    def __init__(self, text=None):
        if self.__class__ is Token:
            raise NotImplementedError("Token class is abstract; it cannot be called directly")
        object.__setattr__(self, '_text', text)

    def __setattr__(self, name, value):
        raise AttributeError("%s is immutable" % self.__class__.__name__)

    @property
    def text(self):
        return self._text

    def __eq__(self, other):
        return self.__class__ is other.__class__ and self._text == other._text

    def __hash__(self):
        return hash((self.__class__.__name__, self._text))

    def __repr__(self):
        if self._text is None:
            return self.__class__.__name__
        return '%s(%r)' % (self.__class__.__name__, self._text)

    def __str__(self):
        return str(self._text)

class Literal(Token):
    """A number, kept exactly as it was written."""
    __slots__ = ()

class Var(Token):
    __slots__ = ()

    @property
    def name(self):
        return self._text

class Func(Token):
    __slots__ = ()

    @property
    def name(self):
        return self._text

class Unknown(Token):
    """A name that looked like a function call but isn't one we know."""
    __slots__ = ()

class Op(Token):
    __slots__ = ()

    def __init__(self, operator):
        if not isinstance(operator, Operator):
            raise TypeError("expected an Operator, got %r" % (operator,))
        Token.__init__(self, operator)

    @property
    def operator(self):
        return self._text

# Parentheses and commas carry no text of their own
class Open(Token):
    __slots__ = ()

    def __str__(self):
        return '('

class Close(Token):
    __slots__ = ()

    def __str__(self):
        return ')'

class Comma(Token):
    __slots__ = ()

    def __str__(self):
        return ','

class Expression(object):
    """An ordered run of tokens, in infix or postfix order.

    Tokens can only be appended; once an Expression has been handed on it is
    treated as read-only.
    """

    def __init__(self, tokens=()):
        self._tokens = []
        for token in tokens:
            self.push(token)

    def push(self, token):
        self._tokens.append(token)

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, index):
        return self._tokens[index]

    def __iter__(self):
        return iter(self._tokens)

    def __eq__(self, other):
        if isinstance(other, Expression):
            return self._tokens == other._tokens
        try:
            return self._tokens == list(other)
        except TypeError:
            return NotImplemented

    __hash__ = None

    def __repr__(self):
        return 'Expression(%r)' % self._tokens

    def __str__(self):
        return ' '.join(str(token) for token in self._tokens)

# Canonical name for every spelling we accept
FUNCTIONS = {
    'sin': 'sin',
    'cos': 'cos',
    'tan': 'tan',
    'asin': 'asin',
    'acos': 'acos',
    'atan': 'atan',
    'sinh': 'sinh',
    'cosh': 'cosh',
    'tanh': 'tanh',
    'sqrt': 'sqrt',
    'exp': 'exp',
    'ln': 'ln',
    'log': 'log',
    'abs': 'abs',
}
FUNCTIONS['arcsin'] = FUNCTIONS['asin']
FUNCTIONS['arccos'] = FUNCTIONS['acos']
FUNCTIONS['arctan'] = FUNCTIONS['atan']

NUMBER_RE = re.compile(r"""
    (?:
        \d+(?:\.\d*)?   # digits [ decimal-point more-digits ]
      | \.\d+           # or decimal-point digits
    )
    (?:[eE]\d+)?       # optional exponent; + and - always end a run
    $
""", re.VERBOSE)

# Anything made of letters that starts like a function we know is treated as
# an attempted function call; lookup_function() then decides if it is one.
FUNCTION_RE = re.compile(r"(?:%s)[a-zA-Z]*$"
                         % '|'.join(sorted(FUNCTIONS, key=len, reverse=True)))

operators = {
    '+': Operator.ADD,
    '*': Operator.MUL,
    '/': Operator.DIV,
    '^': Operator.POW,
    '%': Operator.MOD,
}

STRUCTURAL = frozenset('()+-*/^%,=')

# Which operators already on the stack get moved to the output before the
# incoming one is pushed. Anything else on top of the stack stops the popping.
_pops = {
    Operator.NEGATE: frozenset(),
    Operator.POW: frozenset([Operator.NEGATE]),
}
_pops[Operator.MUL] = _pops[Operator.DIV] = _pops[Operator.MOD] = frozenset([
    Operator.NEGATE, Operator.POW, Operator.MUL, Operator.DIV, Operator.MOD])
_pops[Operator.ADD] = _pops[Operator.SUB] = _pops[Operator.MUL] | frozenset([
    Operator.ADD, Operator.SUB])

def lookup_function(name):
    """Map a function-shaped name to Func, or to Unknown if we don't know it."""
    if name in FUNCTIONS:
        return Func(FUNCTIONS[name])
    return Unknown(name)

def classify(text, number_re=NUMBER_RE, function_re=FUNCTION_RE,
             func_lookup=lookup_function):
    """Decide what kind of token a run of non-structural characters is.

    Numbers are checked first, then function names, and whatever is left is
    a variable. Returns None for an empty run.
    """
    if not text:
        return None
    if number_re.match(text):
        return Literal(text)
    if function_re.match(text):
        return func_lookup(text)
    return Var(text)

def strip_whitespace(s):
    """Remove every whitespace character from s."""
    return ''.join(s.split())

def tokenize(s, number_re=NUMBER_RE, function_re=FUNCTION_RE,
             func_lookup=lookup_function):
    """Convert a string into (variable, infix Expression).

    The string is expected to have no whitespace in it already. variable is
    the name in front of the first '=', or '' if there wasn't one.
    """
    variable = ''
    expr = Expression()
    buf = []

    def flush():
        token = classify(''.join(buf), number_re, function_re, func_lookup)
        del buf[:]
        if token is not None:
            expr.push(token)
        return token

    for c in s:
        if c not in STRUCTURAL or (c == '=' and variable):
            buf.append(c)

        elif c == '=':
            # The assignment target never becomes part of the expression
            if buf:
                variable = ''.join(buf)
                del buf[:]

        elif c == '-':
            left = flush()
            if left is not None:
                expr.push(Op(Operator.SUB))
            else:
                expr.push(Op(Operator.NEGATE))

        else:
            flush()
            if c == '(':
                expr.push(Open())
            elif c == ')':
                expr.push(Close())
            elif c == ',':
                expr.push(Comma())
            else:
                expr.push(Op(operators[c]))

    flush()
    return variable, expr

def to_rpn(tokens):
    """Convert a sequence of tokens to reverse Polish notation using the
    shunting yard algorithm.

    Raises a ConversionError if the expression is malformed.

    See <http://en.wikipedia.org/wiki/Shunting_yard_algorithm>
    """
    # Output, in reverse Polish order
    out = []
    # Operator stack
    stack = []

    for token in tokens:

        # Operands go straight out
        if isinstance(token, (Literal, Var)):
            out.append(token)

        # Functions wait for their closing parenthesis
        elif isinstance(token, (Func, Open)):
            stack.append(token)

        # Argument separator
        elif isinstance(token, Comma):
            # Flush the current argument, leaving the left bracket in place
            while stack and not isinstance(stack[-1], Open):
                out.append(stack.pop())
            if not stack:
                raise UnmatchedCommaError()

        # Right bracket
        elif isinstance(token, Close):
            # Pop off operators, appending them to the output, until we hit a left bracket
            while stack and not isinstance(stack[-1], Open):
                out.append(stack.pop())
            if not stack:
                raise UnmatchedCloseError()
            stack.pop() # the left parenthesis
            # A function right before the bracket takes the whole group as arguments
            if stack and isinstance(stack[-1], Func):
                out.append(stack.pop())

        # Operators
        elif isinstance(token, Op):
            pops = _pops[token.operator]
            while (stack and isinstance(stack[-1], Op)
                   and stack[-1].operator in pops):
                out.append(stack.pop())
            stack.append(token)

        elif isinstance(token, Unknown):
            raise UnknownTokenError(token.text)

        else:
            raise ForeignTokenError(token)

    # Finally, pop off anything still on the stack
    while stack:
        token = stack.pop()
        if isinstance(token, Open):
            raise UnmatchedOpenError()
        out.append(token)

    return Expression(out)

def parse_input(s, number_re=NUMBER_RE, function_re=FUNCTION_RE,
                func_lookup=lookup_function):
    """Tokenize s and convert it to postfix.

    Returns (variable, result). result is the postfix Expression, or the
    ConversionError describing why there isn't one.
    """
    variable, expr = tokenize(s, number_re, function_re, func_lookup)
    try:
        return variable, to_rpn(expr)
    except ConversionError as ex:
        return variable, ex

def main():
    """Test a few things."""
    for s in ("x=2+3",
              "(1+2)*3",
              "2^3^4",
              "-2^2",
              "sin(x,y)",
              "(1+2",
              "sine(x)",
              ):
        variable, result = parse_input(s)
        print(s.ljust(12), "==>", variable or '-', result)

if __name__ == "__main__":
    main()
