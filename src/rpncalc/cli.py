import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .codec import parse_number
from .machine import Machine
from .util import Outcome, RPNError, ParseError, BufferTooSmall


logger = logging.getLogger(__name__)

_MESSAGE_FORMAT = '%(asctime)s,%(msecs)03d %(levelname)-8s %(name)s %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


HELP = '''\
Use Reverse Polish Notation (RPN), 1 2 + instead of 1 + 2.
Numbers are pushed onto the stack for use by operators.
Operators are lower case, numbers are uppercase for bases > 10.
The stack is shown after each line, left-to-right is bottom-to-top.
Operators (X means top of stack, Y X mean next and top, respectively):
?            this help
q            quit
c            clear (except memory and statistics)
ac           all clear (including memory and statistics)
dec hex bin  use base 10, 16, 2
=base        set the base to X
=prec        set the precision to X
?base        push the base
?prec        push the precision
?sf          push the number of significant figures for the base
dup          duplicate X
swap         swap Y and X
rot          move the bottom of the stack to the top
drop .       drop X
depth        push the depth of the stack
sto          copy X into memory and drop it
rcl          push contents of memory
sum          add X to memory and drop it
exc          exchange X with memory
+ - * x /    arithmetic on Y and X
div mod      integer quotient, remainder of Y and X
fmod         floating remainder of Y and X
pow ^        Y to the power X
+- -+        negate X
inv sq sqrt  1/X, X squared, square root of X
!            factorial of X
exp ln log   e to the X, natural log, log base 10 of X
logn         log of Y base X
abs round    absolute value, nearest integer of X
floor ceil   round X down, up
>> <<        Y shifted right, left by X
& | ~        bitwise and, or of Y and X; bitwise negation of X
rad deg      angles in radians, degrees
sin cos tan  trigonometry of X
asin acos atan
atan2        arctangent of Y/X
sinh cosh tanh
todeg torad  convert X between radians and degrees
tof toc      convert X between Celsius and Fahrenheit
toxy         convert polar Y X (r theta) to rectangular x y
tort         convert rectangular Y X (x y) to polar r theta
mi2m ft2m in2mm
             push metres per mile, metres per foot, mm per inch
pi e vc      push pi, e, the speed of light in m/s
time         push the time in seconds
statistics:
avg std      push mean, std dev of numbers on stack
stat         Y X ... pairs go into cumulative statistics
xstat        X ... singles go into cumulative statistics
n            push number of stat points
sx sy        push sum of x, y values of the stat points
sxx syy sxy  push sum of x^2, y^2, x*y of the stat points
mx my        push mean of x, y values of the stat points
sdx sdy      push std dev of x, y values of the stat points
a b          push linear regression a, b of y = ax + b
r            push correlation coefficient of linear regression
random variates:
=urand       set uniform random generator range to Y X
=nrand       set normal random generator mean, std dev to Y X
=erand       set exponential random generator std dev to X
urand nrand erand
             push uniform, normal, exponential random number'''


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to RPN calculator.
    '''

    DEFAULT_PROMPT = '> '
    # Longest number printed, terminator included.
    OUTPUT_LENGTH = 256

    def _machine(self):
        '''
        Return machine set up as the command line asks.
        '''
        machine = Machine(self.args.stack_size)
        try:
            if self.args.base is not None:
                machine.set_base(self.args.base)
            if self.args.precision is not None:
                machine.set_precision(self.args.precision)
        except RPNError as e:
            self.argument_parser.error(str(e))
        return machine

    def _format_stack(self, machine):
        '''
        Format stack, bottom first, or say it's empty.
        '''
        if not machine.stack:
            return '(empty)'
        formatted = []
        for value in machine.stack:
            try:
                formatted.append(machine.format(value, self.OUTPUT_LENGTH))
            except BufferTooSmall as e:
                logger.warning('Number truncated: %s', e)
                formatted.append(e.partial + '...')
        return ' '.join(formatted)

    def dumper(self):
        '''
        Dump each token, what it is, and its arity or value.

        Runs nothing, so numbers are read in the starting base.
        '''
        machine = self._machine()
        lexer = machine.lexer
        print('<kind>\t<repr(token)>\t<arity|value>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                if not lexer.isfeedable(match):
                    continue
                (kind, token), = lexer.matchedgroups(match).items()
                detail = None
                if kind == 'word':
                    op = machine.parse(token)
                    if op is not None:
                        kind, detail = 'operator', machine._arity(op)
                    else:
                        try:
                            kind = 'number'
                            detail = parse_number(token, machine.base)
                        except ParseError:
                            kind = 'unrecognized'
                print(kind, repr(token), detail, sep='\t')
        return 0

    def executor(self):
        '''
        Run machine (RPN calculator), printing the stack after each line.
        '''
        machine = self._machine()
        outcome = Outcome.OK
        for line in self.args.expressions:
            outcome = machine.evaluate(line)
            if outcome is Outcome.OK:
                print(self._format_stack(machine))
            elif outcome is Outcome.ERROR:
                # Abandoned the rest of the line; what ran stays run
                print('error:', machine.error.args[0], file=sys.stderr)
            elif outcome is Outcome.HELP:
                print(HELP)
            elif outcome is Outcome.QUIT:
                break
        return 1 if outcome is Outcome.ERROR else 0

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(self._machine().lexer.LEXEME)
        return 0

    def _prompting_input(self):
        '''
        Return prompting input, or stdin itself.

        Prompts if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log why lines fail')
        self.argument_parser.add_argument('-s', '--stack-size',
                                          type=int,
                                          default=Machine.DEFAULT_CAPACITY,
                                          help='most numbers on the stack')
        self.argument_parser.add_argument('-b', '--base',
                                          type=int,
                                          help='starting number base')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          help='starting output precision')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions',
                                       help='evaluate the rest of the '
                                            'arguments as one line')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Returns exit status: 1 if the last line evaluated failed.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(format=_MESSAGE_FORMAT, datefmt=_DATE_FORMAT,
                            level=(logging.DEBUG if self.args.verbose
                                   else logging.WARNING))
        if self.args.stack_size <= 0:
            self.argument_parser.error('stack size must be positive')
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        elif isinstance(self.args.expressions, list):
            self.args.expressions = [' '.join(self.args.expressions)]
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1
