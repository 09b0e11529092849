from decimal import Decimal
import logging
import struct
import math

import regex

from .util import (ConversionError, InvalidInputFormat, EvalError,
                   NormalizationLimitExceeded, wrap_user_errors, in_int64,
                   twos_complement, UINT64_MAX)


logger = logging.getLogger(__name__)


class Converter:
    '''
    Converter for the numeric literal grammar.

    A literal is classified by the first matching rule of RULES and rewritten
    into another form: plain decimal, ``0x``-tagged hex, ``b``-tagged binary,
    or untagged binary/octal digits. Conversion isn't idempotent. Applying it
    repeatedly is how normalize() drives a literal down to decimal digits.

    Like the lexer, holds no state beyond its settings.
    '''
    # Digits of each supported radix. Sign handled separately.
    DIGITS = {
        2: r'[01]+',
        8: r'[0-7]+',
        10: r'[0-9]+',
        16: r'[0-9a-fA-F]+',
    }
    SIGNED = r'[+-]?'
    UNSIGNED = r'\+?'
    # Float body of the <float>f rule.
    FLOAT = r'''
             [+-]?
             (?:
                 (?:
                     # 1, 1., 1.5
                     \d+
                     (?:
                         \.
                         \d*
                     )?
                     |
                     # .5
                     \.
                     \d+
                 )
                 (?:
                     [eE]
                     [+-]?
                     \d+
                 )?
                 |
                 (?i:
                     inf(?:inity)?
                     |
                     nan
                 )
             )
             '''
    # What the machine can compute on.
    CANONICAL = r'-?[0-9]+'
    # Default regex flags for matching literals
    FLAGS = regex.DOTALL | regex.VERSION1 | regex.VERBOSE

    DEFAULT_MAX_PASSES = 16

    # Output formats for a forced base, by selector.
    FORMATS = {
        'f': '{:.5f}',
        '2': 'b{:b}',
        '8': 'Ox{:o}',
        '10': '{:d}',
        '16': '0x{:x}',
    }
    BASES = tuple(FORMATS)

    def __init__(self, max_passes=None):
        '''
        :param max_passes: Most conversions normalize() may apply.
        '''
        if max_passes is None:
            max_passes = type(self).DEFAULT_MAX_PASSES
        elif max_passes < 0:
            raise ValueError('max_passes must not be negative')
        self.max_passes = max_passes

    def _int(self, digits, radix, signed=True):
        '''
        Strictly parse digits of radix into a 64-bit integer.

        Unlike int(), rejects underscores, whitespace and 0x-style prefixes.
        '''
        sign = type(self).SIGNED if signed else type(self).UNSIGNED
        if not regex.fullmatch(sign + type(self).DIGITS[radix], digits,
                               flags=type(self).FLAGS):
            raise ValueError('invalid digit for radix {}'.format(radix))
        n = int(digits, radix)
        if not (in_int64(n) if signed else 0 <= n <= UINT64_MAX):
            raise OverflowError('out of range')
        return n

    @staticmethod
    def _float_str(value):
        '''
        Shortest round-tripping digits of value, positional, no exponent.
        '''
        if math.isnan(value):
            return 'NaN'
        elif math.isinf(value):
            return 'inf' if value > 0 else '-inf'
        digits = format(Decimal(repr(value)), 'f')
        if '.' in digits:
            digits = digits.rstrip('0').rstrip('.')
        return digits

    @wrap_user_errors('Cannot convert {1}')
    def _hex_to_dec(self, body):
        return str(self._int(body, 16))

    @wrap_user_errors('Cannot convert {1}')
    def _dec_to_tagged_bin(self, body):
        return '{:b}b'.format(twos_complement(self._int(body, 10)))

    @wrap_user_errors('Cannot convert {1}')
    def _bits_to_float(self, body):
        bits = self._int(body, 16, signed=False)
        value, = struct.unpack('>d', struct.pack('>Q', bits))
        return self._float_str(value)

    @wrap_user_errors('Cannot convert {1}')
    def _hex_to_bin(self, body):
        return '{:b}'.format(twos_complement(self._int(body, 16)))

    @wrap_user_errors('Cannot convert {1}')
    def _hex_to_oct(self, body):
        return '{:o}'.format(twos_complement(self._int(body, 16)))

    @wrap_user_errors('Cannot convert {1}')
    def _bin_to_dec(self, body):
        return str(self._int(body, 2))

    @wrap_user_errors('Cannot convert {1}')
    def _float_to_bits(self, body):
        if not regex.fullmatch(type(self).FLOAT, body,
                               flags=type(self).FLAGS):
            raise ValueError('not a float')
        bits, = struct.unpack('>Q', struct.pack('>d', float(body)))
        return '0x{:x}'.format(bits)

    @wrap_user_errors('Cannot convert {1}')
    def _oct_to_hex(self, body):
        return '0x{:x}'.format(twos_complement(self._int(body, 8)))

    @wrap_user_errors('Cannot convert {1}')
    def _bin_to_hex(self, body):
        return '0x{:x}'.format(twos_complement(self._int(body, 2)))

    @wrap_user_errors('Cannot convert {1}')
    def _dec_to_hex(self, body):
        return '0x{:x}'.format(twos_complement(self._int(body, 10)))

    # (name, pattern, handler). Checked in order; first match wins, and the
    # last one matches anything.
    RULES = (
        ('0x<hex>', r'0x(?<body>.*)', _hex_to_dec),
        ('b<decimal>', r'b(?<body>.*)', _dec_to_tagged_bin),
        ('Fx<f64 bits>', r'Fx(?<body>.*)', _bits_to_float),
        ('Bx<hex>', r'Bx(?<body>.*)', _hex_to_bin),
        ('Ox<hex>', r'Ox(?<body>.*)', _hex_to_oct),
        ('<binary>d', r'(?<body>.*)d', _bin_to_dec),
        ('<float>f', r'(?<body>.*)f', _float_to_bits),
        ('<octal>o', r'(?<body>.*)o', _oct_to_hex),
        ('<binary>b', r'(?<body>.*)b', _bin_to_hex),
        ('<decimal>', r'(?<body>.*)', _dec_to_hex),
    )

    def convert(self, literal):
        '''
        Rewrite literal according to the first rule it matches.

        :raises ConversionError: Malformed digits or out of range value.
        '''
        for name, pattern, handler in type(self).RULES:
            match = regex.fullmatch(pattern, literal,
                                    flags=type(self).FLAGS)
            if match is not None:
                converted = handler(self, match.group('body'))
                logger.debug('%s: %r -> %r', name, literal, converted)
                return converted
        raise InvalidInputFormat('No rule for {}'.format(literal))

    def iscanonical(self, literal):
        '''
        Return True if literal is plain decimal digits, optionally negative.
        '''
        return regex.fullmatch(type(self).CANONICAL, literal) is not None

    def normalize(self, literal):
        '''
        Convert literal until it's canonical, and return its integer value.

        :raises NormalizationLimitExceeded: Still not canonical after
            max_passes conversions, or a conversion failed along the way.
        :raises EvalError: Canonical, but doesn't fit in 64 bits.
        '''
        current = literal
        passes = 0
        while not self.iscanonical(current):
            if passes >= self.max_passes:
                raise NormalizationLimitExceeded(
                    'Could not normalize {} in {} passes'.format(
                        literal, self.max_passes))
            try:
                current = self.convert(current)
            except ConversionError as e:
                # Conversion is deterministic; retrying can't get further.
                logger.debug('Could not parse number %r: %s',
                             current, e.args[0])
                raise NormalizationLimitExceeded(
                    'Could not normalize {}'.format(literal)) from e
            passes += 1
        n = int(current)
        if not in_int64(n):
            raise EvalError('Integer overflow')
        return n

    def format(self, value, base):
        '''
        Format integer value in forced output base.

        Binary, octal and hex show negative numbers as 64-bit two's
        complement.
        '''
        if base in {'2', '8', '16'}:
            value = twos_complement(value)
        return type(self).FORMATS[base].format(value)

    def grammar(self):
        '''
        Return literal grammar rules, one per line, in match order.
        '''
        return '\n'.join('{}\t{}'.format(name, pattern)
                         for name, pattern, _ in type(self).RULES)
