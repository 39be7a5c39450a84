'''
Calculator state, operator dispatch, and line evaluation.
'''

from enum import Enum
from functools import partial
from inspect import signature as getsignature, Parameter
import logging
import math
import operator
import time

from . import constants
from .codec import significant_digits, parse_number, format_number
from .lexer import Lexer
from .stack import Stack
from .statistics import Statistics, stddev
from .util import (RPNError, StackEmpty, Underflow, Imbalanced, DomainError,
                   ParseError, Unrecognized, Outcome, wrap_user_errors)
from .variates import UniformRandom, NormalRandom, ExponentialRandom


logger = logging.getLogger(__name__)


class AngleMode(Enum):
    RADIANS = 'rad'
    DEGREES = 'deg'


def _nullary(f):
    '''
    Wrap a constant, or 0-arg callable, so it has a plain signature.
    '''
    def wrapped():
        if callable(f):
            return f()
        else:
            return f
    try:
        wrapped.__doc__ = f.__doc__
        wrapped.__name__ = f.__name__
    except AttributeError:
        pass
    return wrapped


def _unary(f):
    '''
    Work around 1-arg builtins having positional-only signatures.
    '''
    def wrapped(only):
        return f(only)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _binary(f):
    '''
    Work around 2-arg builtins having positional-only signatures.
    '''
    def wrapped(left, right):
        return f(left, right)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _round(x):
    '''
    Round half away from zero, to an int.
    '''
    rounded = math.floor(abs(x) + 0.5)
    return -rounded if x < 0 else rounded


def _bitwise(f):
    '''
    Apply int operator to operands rounded to ints.
    '''
    def wrapped(left, right):
        return f(_round(left), _round(right))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _shift_count(count):
    if abs(count) > constants.MAX_SHIFT:
        raise DomainError('Shift by {} out of range'.format(count))
    return count


@_bitwise
def _shift_left(value, count):
    '''
    Value shifted left by count bits.
    '''
    return value << _shift_count(count)


@_bitwise
def _shift_right(value, count):
    '''
    Value shifted right by count bits.
    '''
    return value >> _shift_count(count)


def _nonzero(divisor):
    # Anything not above the smallest normal double counts as zero.
    if not abs(divisor) > constants.SMALLEST_NORMAL:
        raise DomainError('Division by zero')


def _divide(left, right):
    _nonzero(right)
    return left / right


def _inverse(x):
    _nonzero(x)
    return 1.0 / x


def _quotient(left, right):
    '''
    Integer quotient of rounded operands, truncated toward zero.
    '''
    dividend, divisor = _round(left), _round(right)
    if divisor == 0:
        raise DomainError('Division by zero')
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


def _remainder(left, right):
    '''
    Integer remainder of rounded operands, with the sign of the dividend.
    '''
    return _round(left) - _round(right) * _quotient(left, right)


def _factorial(x):
    n = _round(x)
    if abs(x - n) > constants.SMALLEST_NORMAL:
        raise DomainError('Factorial of non-integer {}'.format(x))
    if n < 0:
        raise DomainError('Factorial of negative {}'.format(x))
    if n > constants.MAX_FACTORIAL:
        raise DomainError('Factorial of {} overflows'.format(x))
    return math.factorial(n)


def _log10(x):
    return math.log(x) * constants.LN10_INV


def _logn(value, base):
    '''
    Logarithm of value to base.
    '''
    if value <= 0.0 or base <= 0.0:
        raise DomainError('Logarithm of non-positive number')
    return math.log(value) / math.log(base)


def _statistic(attribute, minimum):
    '''
    Make operation pushing a statistics value, given enough points.
    '''
    def load(self):
        if self.statistics.n < minimum:
            raise Underflow('Less than {} statistics point(s)'
                            .format(minimum))
        return getattr(self.statistics, attribute)
    load.__name__ = attribute
    load.__doc__ = 'Push {} of the statistics points.'.format(
        attribute.replace('_', ' '))
    return load


class Machine:
    '''
    Arithmetic stack machine (RPN calculator).

    Takes tokens and runs them: operators by exact spelling, anything else
    as a number in the current base. Keeps its stack, memory, statistics and
    settings between lines, so a caller can feed partial expressions and
    pop results later.
    '''

    DEFAULT_CAPACITY = constants.DEFAULT_CAPACITY
    DEFAULT_BASE = constants.DEFAULT_BASE
    DEFAULT_ANGLE_MODE = AngleMode.RADIANS

    # Operations that only need their operands.
    MATH = {
        # Arithmetic
        '+': _binary(operator.__add__),
        '-': _binary(operator.__sub__),
        '*': _binary(operator.__mul__),
        'x': _binary(operator.__mul__),
        '/': _divide,
        'div': _quotient,
        'mod': _remainder,
        'fmod': _binary(math.fmod),
        'pow': _binary(math.pow),
        '^': _binary(math.pow),
        '+-': _unary(operator.__neg__),
        '-+': _unary(operator.__neg__),
        'inv': _inverse,
        'sq': lambda x: x * x,
        'sqrt': _unary(math.sqrt),
        '!': _factorial,

        # Exponential, logarithmic, hyperbolic
        'exp': _unary(math.exp),
        'ln': _unary(math.log),
        'log': _log10,
        'logn': _logn,
        'sinh': _unary(math.sinh),
        'cosh': _unary(math.cosh),
        'tanh': _unary(math.tanh),

        # Rounding
        'abs': _unary(math.fabs),
        'round': _round,
        'floor': _unary(math.floor),
        'ceil': _unary(math.ceil),

        # Bitwise
        '>>': _shift_right,
        '<<': _shift_left,
        '|': _bitwise(operator.__or__),
        '&': _bitwise(operator.__and__),
        '~': lambda x: ~_round(x),

        # Conversions
        'todeg': lambda radians: radians * constants.DEGREES_PER_RADIAN,
        'torad': lambda degrees: degrees * constants.RADIANS_PER_DEGREE,
        'tof': lambda celsius: 9.0 / 5.0 * celsius + 32.0,
        'toc': lambda fahrenheit: 5.0 / 9.0 * (fahrenheit - 32.0),
        'mi2m': _nullary(constants.MI_TO_M),
        'ft2m': _nullary(constants.FT_TO_M),
        'in2mm': _nullary(constants.IN_TO_MM),

        # Constants
        'pi': _nullary(constants.PI),
        'e': _nullary(constants.E),
        'vc': _nullary(constants.SPEED_OF_LIGHT),
    }

    def __init__(self, capacity=None, *, clock=time.time,
                 uniform=None, normal=None, exponential=None):
        '''
        Create empty stack machine.

        :param capacity: Most values the stack holds.
        :param clock: Returns the time, in seconds, for the time operator.
        :param uniform: Uniform variates, needing set_parameters(a, b), draw().
        :param normal: Normal variates, set_parameters(mean, sd), draw().
        :param exponential: Exponential variates, set_parameters(sd), draw().
        '''
        cls = type(self)
        self.stack = Stack(cls.DEFAULT_CAPACITY if capacity is None
                           else capacity)
        self.memory = 0.0
        self.statistics = Statistics()
        self.base = cls.DEFAULT_BASE
        self.significant_digits = significant_digits(self.base)
        self.set_precision(self.significant_digits)
        self.angle_mode = cls.DEFAULT_ANGLE_MODE
        self.uniform = UniformRandom() if uniform is None else uniform
        self.normal = NormalRandom() if normal is None else normal
        self.exponential = (ExponentialRandom() if exponential is None
                            else exponential)
        self.clock = clock
        self.lexer = Lexer()
        # Why the last line failed, if it did.
        self.error = None

    def __repr__(self):
        return '<{} base={} precision={} {!r}>'.format(type(self).__name__,
                                                       self.base,
                                                       self.precision,
                                                       list(self.stack))

    def set_base(self, base):
        '''
        Change number base, reclamping precision. Stack is untouched.
        '''
        if not constants.MIN_BASE <= base <= constants.MAX_BASE:
            raise DomainError('Base {} not in [{}, {}]'.format(
                base, constants.MIN_BASE, constants.MAX_BASE))
        self.base = base
        self.significant_digits = significant_digits(base)
        self.set_precision(self.requested_precision)

    def set_precision(self, precision):
        '''
        Ask for output precision; get as much as the base allows.
        '''
        self.requested_precision = precision
        self.precision = max(0, min(precision, self.significant_digits))

    def clear(self):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()

    def all_clear(self):
        '''
        Clear stack, memory and statistics. Settings stay.
        '''
        self.memory = 0.0
        self.statistics.clear()
        self.clear()

    def push(self, value):
        self.stack.push(value)

    def pop(self):
        return self.stack.pop()

    def format(self, value, max_length=None):
        '''
        Format number in current base and precision.
        '''
        return format_number(value, self.base, self.precision, max_length)

    def evaluate(self, line):
        '''
        Run every token on line, stopping at the first that fails.

        What earlier tokens did stays done. The reason for an ERROR is left
        in ``self.error``.
        '''
        self.error = None
        for match in self.lexer.lex(line):
            if not self.lexer.isfeedable(match):
                continue
            groups = self.lexer.matchedgroups(match)
            if 'help' in groups:
                return Outcome.HELP
            if 'quit' in groups:
                return Outcome.QUIT
            token = groups['word']
            try:
                self.feed(token)
            except RPNError as e:
                self.error = e
                logger.debug('Abandoning rest of %r at %r', line, token,
                             exc_info=True)
                return Outcome.ERROR
        return Outcome.OK

    def feed(self, token):
        '''
        Run operator, or push number.

        :raises Unrecognized: Token neither operator nor number.
        '''
        op = self.parse(token)
        if op is not None:
            self._apply(token, op)
            return
        try:
            value = parse_number(token, self.base)
        except ParseError as e:
            raise Unrecognized('Unknown operator or bad base {} number {!r}'
                               .format(self.base, token)) from e
        self.stack.push(value)

    def parse(self, token):
        '''
        Return callable for operator token, bound to machine if need be.

        None if no such operator.
        '''
        if token in type(self).FUNCTIONS:
            return partial(type(self).FUNCTIONS[token], self)
        return type(self).MATH.get(token)

    def _arity(self, f):
        '''
        Return number of non-default positional arguments, if callable.
        '''
        if not callable(f):
            return None
        signature = getsignature(f)
        parameters = signature.parameters.values()
        positionals = [parameter
                       for parameter
                       in parameters
                       if parameter.kind == Parameter.POSITIONAL_OR_KEYWORD
                       and parameter.default is Parameter.empty]
        return len(positionals)

    def _apply(self, token, op):
        '''
        Apply operator to the stack.

        Operands are only read until the operator succeeds; then they're
        replaced by its result(s). None means no result, a tuple several.
        '''
        arity = self._arity(op)
        # Deepest first, so 9 2 ^ is 9**2, not 2**9.
        operands = [self.stack.peek(down)
                    for down
                    in reversed(range(arity))]
        result = self._call(token, op, *operands)
        logger.debug('%s %r -> %r', token, operands, result)
        if result is None:
            for _ in range(arity):
                self.stack.drop()
        elif isinstance(result, tuple):
            for _ in range(arity):
                self.stack.drop()
            for value in result:
                self.stack.push(value)
        elif arity:
            self.stack.replace(arity, result)
        else:
            self.stack.push(result)

    @wrap_user_errors('Cannot evaluate {1}')
    def _call(self, token, op, *operands):
        result = op(*operands)
        if result is None:
            return None
        elif isinstance(result, tuple):
            return tuple(map(float, result))
        return float(result)

    def _radians(self, angle):
        if self.angle_mode is AngleMode.DEGREES:
            return angle * constants.RADIANS_PER_DEGREE
        return angle

    def _angle(self, radians):
        if self.angle_mode is AngleMode.DEGREES:
            return radians * constants.DEGREES_PER_RADIAN
        return radians

    def decimal(self):
        self.set_base(10)

    def hexadecimal(self):
        self.set_base(16)

    def binary(self):
        self.set_base(2)

    def store_base(self, base):
        '''
        Pop and use as number base.
        '''
        self.set_base(int(base))

    def store_precision(self, precision):
        '''
        Pop and use as output precision.
        '''
        self.set_precision(int(precision))

    def load_base(self):
        return self.base

    def load_precision(self):
        return self.precision

    def load_significant_digits(self):
        return self.significant_digits

    def dup(self):
        '''
        Duplicate element at top of stack.
        '''
        self.stack.dup()

    def swap(self):
        '''
        Swap two elements at top of stack.
        '''
        self.stack.swap()

    def rotate(self):
        '''
        Move the bottom element to the top.
        '''
        self.stack.rotate()

    def drop(self):
        self.stack.drop()

    def depth(self):
        '''
        Push the number of elements on the stack.
        '''
        return len(self.stack)

    def average(self):
        '''
        Push the mean of the stack, leaving it in place.
        '''
        if not self.stack:
            raise StackEmpty('Empty stack')
        return sum(self.stack) / len(self.stack)

    def deviation(self):
        '''
        Push the sample standard deviation of the stack, leaving it in place.
        '''
        if not self.stack:
            raise StackEmpty('Empty stack')
        return stddev(self.stack)

    def stat(self):
        '''
        Move x y pairs, bottom of stack first, into the statistics.
        '''
        depth = len(self.stack)
        if depth == 0 or depth % 2:
            raise Imbalanced('Need x y pairs, have {} element(s)'
                             .format(depth))
        values = list(self.stack)
        for x, y in zip(values[::2], values[1::2]):
            self.statistics.add(x, y)
        self.stack.clear()

    def xstat(self):
        '''
        Move y values into the statistics, x counting up from n.
        '''
        if not self.stack:
            raise StackEmpty('Empty stack')
        for y in self.stack:
            self.statistics.add(self.statistics.n, y)
        self.stack.clear()

    def store(self, value):
        '''
        Pop into memory.
        '''
        self.memory = value

    def recall(self):
        return self.memory

    def accumulate(self, value):
        '''
        Pop and add to memory.
        '''
        self.memory += value

    def exchange(self, value):
        '''
        Exchange top of stack with memory.
        '''
        self.memory, value = value, self.memory
        return value

    def sin(self, angle):
        return math.sin(self._radians(angle))

    def cos(self, angle):
        return math.cos(self._radians(angle))

    def tan(self, angle):
        return math.tan(self._radians(angle))

    def asin(self, x):
        return self._angle(math.asin(x))

    def acos(self, x):
        return self._angle(math.acos(x))

    def atan(self, x):
        return self._angle(math.atan(x))

    def atan2(self, y, x):
        return self._angle(math.atan2(y, x))

    def radians(self):
        self.angle_mode = AngleMode.RADIANS

    def degrees(self):
        self.angle_mode = AngleMode.DEGREES

    def to_rectangular(self, r, theta):
        '''
        Replace polar r theta with x y.
        '''
        theta = self._radians(theta)
        return r * math.cos(theta), r * math.sin(theta)

    def to_polar(self, x, y):
        '''
        Replace x y with polar r theta.
        '''
        return math.sqrt(x * x + y * y), self._angle(math.atan2(y, x))

    def now(self):
        return self.clock()

    def store_uniform(self, a, b):
        self.uniform.set_parameters(a, b)

    def store_normal(self, mean, sd):
        self.normal.set_parameters(mean, sd)

    def store_exponential(self, sd):
        self.exponential.set_parameters(sd)

    def uniform_variate(self):
        return self.uniform.draw()

    def normal_variate(self):
        return self.normal.draw()

    def exponential_variate(self):
        return self.exponential.draw()

    # Operations on the machine itself, bound to it on lookup.
    FUNCTIONS = {
        'c': clear,
        'ac': all_clear,

        'dec': decimal,
        'hex': hexadecimal,
        'bin': binary,
        '=base': store_base,
        '=prec': store_precision,
        '?base': load_base,
        '?prec': load_precision,
        '?sf': load_significant_digits,

        'dup': dup,
        'swap': swap,
        'rot': rotate,
        'drop': drop,
        '.': drop,
        'depth': depth,

        'avg': average,
        'std': deviation,
        'stat': stat,
        'xstat': xstat,
        'n': _statistic('n', 0),
        'sx': _statistic('sum_x', 0),
        'sy': _statistic('sum_y', 0),
        'sxx': _statistic('sum_xx', 0),
        'syy': _statistic('sum_yy', 0),
        'sxy': _statistic('sum_xy', 0),
        'mx': _statistic('mean_x', 1),
        'my': _statistic('mean_y', 1),
        'sdx': _statistic('stddev_x', 2),
        'sdy': _statistic('stddev_y', 2),
        'a': _statistic('slope', 2),
        'b': _statistic('intercept', 2),
        'r': _statistic('correlation', 2),

        'sto': store,
        'rcl': recall,
        'sum': accumulate,
        'exc': exchange,

        'sin': sin,
        'cos': cos,
        'tan': tan,
        'asin': asin,
        'acos': acos,
        'atan': atan,
        'atan2': atan2,
        'rad': radians,
        'deg': degrees,
        'toxy': to_rectangular,
        'tort': to_polar,

        'time': now,

        '=urand': store_uniform,
        '=nrand': store_normal,
        '=erand': store_exponential,
        'urand': uniform_variate,
        'nrand': normal_variate,
        'erand': exponential_variate,
    }

    # All operator spellings.
    OPERATORS = set(MATH) | set(FUNCTIONS)
    assert not set(MATH) & set(FUNCTIONS)


def calculate(line, capacity=None):
    '''
    Evaluate line on a fresh machine and return the top of its stack.

    :raises RPNError: Line failed, asked for help or quit, or left nothing.
    '''
    machine = Machine(capacity)
    outcome = machine.evaluate(line)
    if outcome is Outcome.ERROR:
        raise machine.error
    elif outcome is not Outcome.OK:
        raise RPNError('{!r} is not a calculation'.format(line))
    return machine.pop()
