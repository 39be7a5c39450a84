from pytest import fixture

from rpncalc.machine import Machine


@fixture
def machine():
    '''
    Machine with the default stack size and a clock stuck at 1000.5 s.
    '''
    return Machine(clock=lambda: 1000.5)


@fixture
def run(machine):
    '''
    Evaluate lines on the machine, returning its stack, bottom first.

    Fails the test if any line doesn't evaluate.
    '''
    def run(*lines):
        for line in lines:
            outcome = machine.evaluate(line)
            assert outcome.name == 'OK', (line, machine.error)
        return list(machine.stack)
    return run
