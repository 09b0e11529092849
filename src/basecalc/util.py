from functools import wraps
import struct


# Signed 64-bit range; everything the machine computes must fit.
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1
# Mask for rendering negative values as two's complement bit patterns.
WORD = 2 ** 64


class CalcError(Exception):
    pass


class ConversionError(CalcError):
    '''
    Literal couldn't be converted.
    '''


class ParseIntError(ConversionError):
    '''
    Malformed digits for the selected radix, or value out of range.
    '''


class InvalidInputFormat(ConversionError):
    '''
    Literal matches no rule of the grammar.

    Reserved: the decimal rule catches everything, so nothing raises this.
    '''


class EvalError(CalcError):
    pass


class NormalizationLimitExceeded(EvalError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts parse failures to ParseIntErrors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except (ValueError, OverflowError, struct.error) as e:
                raise ParseIntError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def in_int64(n):
    return INT64_MIN <= n <= INT64_MAX


def twos_complement(n):
    '''
    Return the 64-bit two's complement bit pattern of n, as an unsigned int.
    '''
    return n % WORD if n < 0 else n
