'''
Conversion between numeric text and floats in any base from 2 to 36.

Digits above 9 are the uppercase letters only; lowercase is left free for
operator spellings.
'''

import math

from .constants import (DIGITS, WHITESPACE, MANTISSA_BITS,
                        MIN_BASE, MAX_BASE, DEFAULT_BASE)
from .util import ParseError, BufferTooSmall


def _check_base(base):
    if not MIN_BASE <= base <= MAX_BASE:
        raise ValueError('Base {} not in [{}, {}]'.format(base,
                                                          MIN_BASE,
                                                          MAX_BASE))


def significant_digits(base):
    '''
    Return how many digits in ``base`` a double can meaningfully hold.
    '''
    _check_base(base)
    return int(MANTISSA_BITS * math.log(2) / math.log(base))


def parse_number(text, base=DEFAULT_BASE):
    '''
    Parse numeric text in ``base``.

    Accepts an optional leading sign, digits of the base and at most one
    radix point. An ``e`` is tolerated once the number has started, but what
    follows it is never applied as an exponent: ``1.5e3`` is 1.5.

    :raises ParseError: On any other character, misplaced sign or point, or
                        when there are no digits at all.
    '''
    _check_base(base)
    token = text.strip(WHITESPACE)
    number = 0.0
    started = negative = exponent = got_digit = False
    # 0 while in the integral part, then the place of the next fraction digit
    place = 0
    for c in token:
        if c in '+-':
            if started:
                raise ParseError('Misplaced sign in {!r}'.format(token))
            started = True
            negative = c == '-'
            continue
        if c == 'e':
            if not started or exponent:
                raise ParseError('Misplaced e in {!r}'.format(token))
            exponent = True
            continue
        if c == '.':
            if place or exponent:
                raise ParseError('Misplaced point in {!r}'.format(token))
            started = True
            place = 1
            continue
        digit = DIGITS.find(c)
        if not 0 <= digit < base:
            raise ParseError('Bad base {} digit {!r} in {!r}'.format(base,
                                                                    c,
                                                                    token))
        started = True
        if exponent:
            continue
        if place:
            number += digit / float(base) ** place
            place += 1
        else:
            number = number * base + digit
        got_digit = True
    if not got_digit:
        raise ParseError('No digits in {!r}'.format(token))
    return -number if negative else number


def format_number(value, base=DEFAULT_BASE, precision=0, max_length=None):
    '''
    Format ``value`` in ``base``.

    Rounds half up once, at ``precision`` fractional digits, then spends the
    precision on integer digits first and fractional digits with whatever is
    left, truncating. Trailing fractional zeros are dropped, as is a radix
    point with nothing after it.

    :param max_length: Room available, terminator included; no limit if None.
    :raises BufferTooSmall: Text doesn't fit in max_length. What did fit is
                            on the exception.
    '''
    _check_base(base)
    if math.isnan(value):
        text = 'nan'
    elif math.isinf(value):
        text = '-inf' if value < 0 else 'inf'
    else:
        text = _format_finite(value, base, precision)
    if max_length is not None and len(text) + 1 > max_length:
        raise BufferTooSmall('{} needs {} characters, have {}'.format(
                                 text, len(text) + 1, max_length),
                             partial=text[:max(max_length - 1, 0)])
    return text


def _format_finite(value, base, precision):
    sign = ''
    if value < 0.0:
        sign = '-'
        value = -value
    precision = max(precision, 0)
    value += 0.5 * float(base) ** -precision

    whole = math.floor(value)
    fraction = value - whole
    integral = []
    while whole:
        whole, digit = divmod(whole, base)
        integral.append(DIGITS[digit])
        precision -= 1
    integral = ''.join(reversed(integral)) or '0'

    fractional = []
    for _ in range(precision):
        fraction *= base
        digit = int(fraction)
        fraction -= digit
        fractional.append(DIGITS[digit])
    fractional = ''.join(fractional).rstrip('0')

    if fractional:
        return sign + integral + '.' + fractional
    return sign + integral
