from collections import namedtuple
from enum import Enum
import logging
import sys

from .util import ConversionError
from .converter import Converter


logger = logging.getLogger(__name__)


class Kind(Enum):
    NUMBER = 'number'
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    LPAREN = '('
    RPAREN = ')'


class Token(namedtuple('Token', ['kind', 'literal'], defaults=[None])):
    '''
    Lexeme of an infix expression.

    Only NUMBER tokens carry a literal, already run through the converter.
    '''
    __slots__ = ()

    def __str__(self):
        if self.kind is Kind.NUMBER:
            return self.literal
        return self.kind.value


PLUS = Token(Kind.PLUS)
MINUS = Token(Kind.MINUS)
STAR = Token(Kind.STAR)
SLASH = Token(Kind.SLASH)
LPAREN = Token(Kind.LPAREN)
RPAREN = Token(Kind.RPAREN)


def number(literal):
    return Token(Kind.NUMBER, literal)


class Lexer:
    '''
    Lexer for infix expressions.

    Operators and parentheses are single characters that end any pending
    literal. Everything else except whitespace is part of a literal, letters
    included, since the literal grammar needs them.
    '''
    SYMBOLS = {token.kind.value: token
               for token
               in [PLUS, MINUS, STAR, SLASH, LPAREN, RPAREN]}

    def __init__(self, converter=None, out=None):
        '''
        :param converter: Literal converter; a default one if not given.
        :param out: Where to report unconvertible literals. stdout if not
                    given.
        '''
        self.converter = converter or Converter()
        self.out = out

    def lex(self, line):
        '''
        Take a line and yield all tokens.

        Literals that fail to convert are reported and dropped; lexing carries
        on with the rest of the line.
        '''
        run = []
        for c in line:
            if c.isspace():
                continue
            elif c in type(self).SYMBOLS:
                yield from self._flush(run)
                yield type(self).SYMBOLS[c]
            else:
                run.append(c)
        yield from self._flush(run)

    def _flush(self, run):
        '''
        Convert and yield pending literal, if any, emptying it.
        '''
        if not run:
            return
        literal = ''.join(run)
        run.clear()
        try:
            converted = self.converter.convert(literal)
        except ConversionError:
            print('Could not convert number {}'.format(literal),
                  file=self.out or sys.stdout)
            return
        logger.debug('number %r from %r', converted, literal)
        yield number(converted)
