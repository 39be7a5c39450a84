from enum import Enum
from functools import wraps


class RPNError(Exception):
    pass


class StackFull(RPNError):
    pass


class StackEmpty(RPNError):
    pass


class Underflow(RPNError):
    '''
    Too few operands (or statistics points) for an operation.
    '''


class Imbalanced(RPNError):
    '''
    Odd number of values where (x, y) pairs are expected.
    '''


class DomainError(RPNError):
    pass


class ParseError(RPNError):
    pass


class BufferTooSmall(RPNError):
    '''
    Formatted number does not fit.

    :param partial: The text that did fit, truncated.
    '''
    def __init__(self, message, partial=''):
        super().__init__(message)
        self.partial = partial


class Unrecognized(RPNError):
    '''
    Token is neither an operator nor a number.
    '''


class Outcome(Enum):
    '''
    Result of evaluating one line.
    '''
    OK = 'ok'
    ERROR = 'error'
    HELP = 'help'
    QUIT = 'quit'


def wrap_user_errors(fmt, error=DomainError):
    '''
    Decorator that converts floating-point failures to calculator errors.

    Passes through RPNErrors. Everything math raises for domain, range or
    division problems (ValueError, ArithmeticError) becomes ``error``, with
    ``fmt`` formatted from the call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except (ValueError, ArithmeticError) as e:
                raise error(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
