'''
Base-N number parsing and formatting tests
'''

from pytest import raises, approx, mark

from rpncalc.codec import significant_digits, parse_number, format_number
from rpncalc.util import ParseError, BufferTooSmall


def test_significant_digits():
    assert significant_digits(10) == 15
    assert significant_digits(16) == 13
    assert significant_digits(8) == 17
    assert significant_digits(36) == 10


def test_significant_digits_bad_base():
    with raises(ValueError):
        significant_digits(1)
    with raises(ValueError):
        significant_digits(37)


def test_parse_decimal():
    assert parse_number('42') == 42.0
    assert parse_number('-2.5') == -2.5
    assert parse_number('+.25') == 0.25
    assert parse_number('7.') == 7.0
    assert parse_number('  3  \n') == 3.0


def test_parse_zero_is_not_failure():
    assert parse_number('0') == 0.0
    assert parse_number('-0.0') == 0.0


def test_parse_other_bases():
    assert parse_number('FF', 16) == 255.0
    assert parse_number('101.1', 2) == 5.5
    assert parse_number('Z', 36) == 35.0
    assert parse_number('0.8', 16) == 0.5


@mark.parametrize('text, base', [
    ('ff', 16),     # lowercase is for operators
    ('2', 2),
    ('A', 10),
    ('G', 16),
])
def test_parse_digit_outside_base(text, base):
    with raises(ParseError):
        parse_number(text, base)


@mark.parametrize('text', [
    '',
    '-',
    '+',
    '.',
    '-.',
    '1.2.3',
    '--1',
    '+-1',
    '1-',
    '1,5',
    '1 2',
])
def test_parse_malformed(text):
    with raises(ParseError):
        parse_number(text)


def test_parse_exponent_is_not_applied():
    assert parse_number('1.5e3') == 1.5
    assert parse_number('2e') == 2.0


def test_parse_exponent_misplaced():
    with raises(ParseError):
        parse_number('e5')
    with raises(ParseError):
        parse_number('1e2e3')
    with raises(ParseError):
        parse_number('1e.5')
    with raises(ParseError):
        parse_number('-e5')


def test_format_rounds_then_truncates():
    assert format_number(5.0 / 2.0, 10, 2) == '2.5'
    # Two integer digits use up the precision.
    assert format_number(12.75, 10, 2) == '12'
    assert format_number(2.25, 10, 2) == '2.2'
    assert format_number(2.5, 10, 1) == '2'
    assert format_number(0.125, 10, 2) == '0.13'


def test_format_trims_zeros():
    assert format_number(2.0, 10, 15) == '2'
    assert format_number(0.5, 10, 15) == '0.5'
    assert format_number(100.0, 10, 15) == '100'


def test_format_no_precision():
    assert format_number(2.5, 10, 0) == '3'
    assert format_number(2.4, 10, -4) == '2'


def test_format_small_and_negative():
    assert format_number(0.001, 10, 15) == '0.001'
    assert format_number(-1.0 / 3.0, 10, 15) == '-0.333333333333333'
    assert format_number(0.0, 10, 15) == '0'


def test_format_other_bases():
    assert format_number(255.0, 16, 13) == 'FF'
    assert format_number(5.5, 2, 53) == '101.1'
    assert format_number(35.0, 36, 10) == 'Z'
    assert format_number(-0.5, 16, 13) == '-0.8'


def test_format_non_finite():
    assert format_number(float('inf'), 10, 15) == 'inf'
    assert format_number(float('-inf'), 16, 13) == '-inf'
    assert format_number(float('nan'), 10, 15) == 'nan'


def test_format_buffer_too_small():
    assert format_number(123.5, 10, 15, max_length=6) == '123.5'
    with raises(BufferTooSmall) as excinfo:
        format_number(123.5, 10, 15, max_length=5)
    assert excinfo.value.partial == '123.'


@mark.parametrize('base', [2, 3, 8, 10, 16, 36])
@mark.parametrize('value', [0.0, 0.1, -0.7, 1.0 / 3.0, 0.984375])
def test_format_then_parse_within_half_last_digit(base, value):
    for precision in range(significant_digits(base) + 1):
        text = format_number(value, base, precision)
        # Plus a little for the arithmetic of both conversions.
        tolerance = 0.5 * base ** -precision + 1e-14
        assert parse_number(text, base) == approx(value, abs=tolerance)
