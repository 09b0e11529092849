from collections import deque
import logging
import operator

from .util import EvalError, in_int64
from .converter import Converter
from .lexer import Kind


logger = logging.getLogger(__name__)


def _truncdiv(left, right):
    '''
    Integer division rounding toward zero, like C, not floor like //.
    '''
    if right == 0:
        raise EvalError('Division by zero')
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class Machine:
    '''
    Integer stack machine.

    Takes postfix tokens and runs them. Numbers are normalized to 64-bit
    integers as they're pushed; operators pop two and push one.
    '''

    BUILTINS = {
        Kind.PLUS: operator.__add__,
        Kind.MINUS: operator.__sub__,
        Kind.STAR: operator.__mul__,
        Kind.SLASH: _truncdiv,
    }

    def __init__(self, converter=None):
        '''
        Create empty stack machine.

        :param converter: Normalizes number literals; a default one if not
                          given.
        '''
        self.converter = converter or Converter()
        self.stack = deque()

    def evaluate(self, tokens):
        '''
        Run postfix tokens on an empty stack and return the top of the stack.

        Anything left below the top is ignored.

        :raises EvalError: Too few operands, division by zero, overflow, a
            stray parenthesis, or a literal that won't normalize.
        '''
        self.stack.clear()
        for token in tokens:
            if token.kind is Kind.NUMBER:
                self._pshstack(self.converter.normalize(token.literal))
            elif token.kind in type(self).BUILTINS:
                self._apply(type(self).BUILTINS[token.kind])
            else:
                raise EvalError('Unexpected token')
        top = self._popstack()[0]
        if self.stack:
            logger.debug('Ignoring %d surplus value(s) on stack: %s',
                         len(self.stack), list(self.stack))
        return top

    def _apply(self, f):
        '''
        Apply binary operator to the two topmost elements.
        '''
        # Topmost is the right hand side: 9 2 - is 9 - 2, not 2 - 9.
        right, left = self._popstack(n=2)
        res = f(left, right)
        if not in_int64(res):
            raise EvalError('Integer overflow')
        self._pshstack(res)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of elements from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise EvalError('Invalid expression')
        return [self.stack.pop() for _ in range(n)]
