'''
Calculator and numeric literal base converter.

Evaluates infix integer arithmetic (+, -, *, / with * and / binding tighter,
parentheses) where every number may be written in any of a handful of bases:

- 0x<hex>, <binary>b, <octal>o, plain <decimal>
- <binary>d, binary to decimal
- b<decimal>, decimal to tagged binary
- Bx<hex>, Ox<hex>, hex to binary or octal digits
- <float>f and Fx<hex>, IEEE-754 double to and from its raw bits

Given literals as arguments instead, converts each one, optionally forcing
the output base.
'''

from .cli import CLI
from .converter import Converter
from .lexer import Lexer, Token, Kind
from .parser import Parser
from .machine import Machine
from .util import (CalcError, ConversionError, ParseIntError,
                   InvalidInputFormat, EvalError, NormalizationLimitExceeded)


__all__ = ('CLI', 'Converter', 'Lexer', 'Token', 'Kind', 'Parser', 'Machine',
           'CalcError', 'ConversionError', 'ParseIntError',
           'InvalidInputFormat', 'EvalError', 'NormalizationLimitExceeded')
