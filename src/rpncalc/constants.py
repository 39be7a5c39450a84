'''
Read-only numbers the calculator pushes, converts with, or is bounded by.
'''

from sys import float_info


E = 2.7182818284590452354
PI = 3.1415926535897932385
# log10(x) == ln(x) * LN10_INV
LN10_INV = 0.43429448190325182765
# m/s
SPEED_OF_LIGHT = 299792458.0

MI_TO_M = 5280.0 * 12.0 * 0.0254
FT_TO_M = 12.0 * 0.0254
IN_TO_MM = 25.4

DEGREES_PER_RADIAN = 57.295779513082320875
RADIANS_PER_DEGREE = 0.017453292519943295770

# Bits in the fraction of an IEEE double, hidden bit included.
MANTISSA_BITS = 53
# Smallest positive normal double.
SMALLEST_NORMAL = float_info.min
EPSILON = float_info.epsilon
# Largest n with n! a finite double.
MAX_FACTORIAL = 170
# Bits in the widest integer a finite double holds.
MAX_SHIFT = float_info.max_exp

MIN_BASE = 2
MAX_BASE = 36
DEFAULT_BASE = 10
DEFAULT_CAPACITY = 10

DIGITS = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'
WHITESPACE = ' \t\n\r'

assert len(DIGITS) == MAX_BASE
