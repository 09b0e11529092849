'''
Stack machine tests
'''

from basecalc.machine import Machine
from basecalc.lexer import number, PLUS, MINUS, SLASH, LPAREN
from basecalc.util import EvalError, NormalizationLimitExceeded

from pytest import raises, mark


@mark.parametrize('line, expected', [
    ('3 + 4 * 2', 11),
    ('(3 + 4) * 2', 14),
    ('10 - 4 - 3', 3),
    ('7 / 2', 3),
    ('(0 - 7) / 2', -3),
    ('7 / (0 - 2)', -3),
    ('0xff + 1', 256),
    ('101d * 2', 10),
    ('b101 - 1', 100),
    ('17o + 101b', 20),
    ('Oxff', 377),
    ('1.5f - 4609434218613702656', 0),
])
def test_calculate(calculate, line, expected):
    assert calculate(line) == expected


def test_division_by_zero(calculate):
    with raises(EvalError, match='Division by zero'):
        calculate('5 / 0')


@mark.parametrize('line', ['+', '', '1 +', '- 5'])
def test_invalid_expression(calculate, line):
    with raises(EvalError, match='Invalid expression'):
        calculate(line)


def test_unexpected_token(calculate):
    with raises(EvalError, match='Unexpected token'):
        calculate('(1 + 2')


def test_overflow(calculate):
    with raises(EvalError, match='Integer overflow'):
        calculate('9223372036854775807 + 1')
    with raises(EvalError, match='Integer overflow'):
        calculate('4294967296 * 4294967296')


def test_dropped_literal(calculate, out):
    with raises(EvalError, match='Invalid expression'):
        calculate('zz + 1')
    assert out.getvalue() == 'Could not convert number zz\n'


def test_non_integral_literal(calculate):
    with raises(NormalizationLimitExceeded):
        calculate('Fx3ff8000000000000 + 1')


def test_operand_order():
    m = Machine()
    assert m.evaluate([number('9'), number('2'), MINUS]) == 7
    assert m.evaluate([number('9'), number('2'), SLASH]) == 4


def test_surplus_ignored():
    m = Machine()
    assert m.evaluate([number('1'), number('2')]) == 2
    assert m.evaluate([number('1'), number('2'), number('3'), PLUS]) == 5


def test_fresh_stack():
    m = Machine()
    m.evaluate([number('1'), number('2')])
    with raises(EvalError, match='Invalid expression'):
        m.evaluate([PLUS])


def test_stray_paren():
    with raises(EvalError, match='Unexpected token'):
        Machine().evaluate([number('1'), LPAREN])


def test_unnormalizable_literal():
    with raises(NormalizationLimitExceeded):
        Machine().evaluate([number('0xffffffffffffffff')])
