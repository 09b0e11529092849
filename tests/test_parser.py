'''
Shunting yard tests
'''

from basecalc.lexer import Lexer
from basecalc.parser import Parser


def postfix(line, out):
    return ' '.join(map(str, Parser().postfix(Lexer(out=out).lex(line))))


def test_precedence(out):
    assert postfix('3 + 4 * 2', out) == '0x3 0x4 0x2 * +'
    assert postfix('3 * 4 + 2', out) == '0x3 0x4 * 0x2 +'


def test_left_associative(out):
    assert postfix('1 - 2 - 3', out) == '0x1 0x2 - 0x3 -'
    assert postfix('8 / 4 * 2', out) == '0x8 0x4 / 0x2 *'


def test_parentheses(out):
    assert postfix('(3 + 4) * 2', out) == '0x3 0x4 + 0x2 *'
    assert postfix('2 * ((3 - 1) / 2)', out) == '0x2 0x3 0x1 - 0x2 / *'


def test_unmatched_right_paren_dropped(out):
    # Not an error: the stray ")" only flushes the operator stack.
    assert postfix('1 + 2) * 3', out) == '0x1 0x2 + 0x3 *'


def test_unmatched_left_paren_kept(out):
    # The stray "(" is flushed into the output, for the machine to reject.
    assert postfix('(1 + 2', out) == '0x1 0x2 + ('


def test_empty(out):
    assert Parser().postfix([]) == []
