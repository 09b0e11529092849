from io import StringIO

from pytest import fixture

from basecalc.converter import Converter
from basecalc.lexer import Lexer
from basecalc.parser import Parser
from basecalc.machine import Machine


@fixture
def out() -> StringIO:
    '''
    Output sink standing in for stdout.
    '''
    return StringIO()


@fixture
def converter() -> Converter:
    return Converter()


@fixture
def calculate(out: StringIO):
    '''
    Lex, reorder and evaluate an infix expression, as the CLI does.
    '''
    converter = Converter()
    lexer = Lexer(converter, out=out)
    parser = Parser()
    machine = Machine(converter)

    def calculate(line: str) -> int:
        return machine.evaluate(parser.postfix(lexer.lex(line)))
    return calculate
