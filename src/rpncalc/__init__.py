'''
RPN calculator.

Evaluates Reverse Polish Notation over a bounded stack of doubles, reading
and writing numbers in any base from 2 to 36. Besides arithmetic and the
usual stack operators, keeps one memory register, running two-variable
statistics with least-squares regression, converts angles and units, and
draws uniform, normal and exponential random variates.

The machine keeps its state between lines, so it can be fed a stream of
partial expressions and asked for results later:

    >>> machine = Machine()
    >>> machine.evaluate('5 2')
    <Outcome.OK: 'ok'>
    >>> machine.evaluate('/')
    <Outcome.OK: 'ok'>
    >>> machine.format(machine.pop())
    '2.5'

A failing token abandons the rest of its line, but not what the tokens
before it did.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, AngleMode, calculate
from .util import Outcome, RPNError


__all__ = 'Machine', 'AngleMode', 'Lexer', 'CLI', 'Outcome', 'RPNError', \
          'calculate'
