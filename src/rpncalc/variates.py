'''
Seedable pseudo-random variates.

Built on the Park and Miller "minimal standard" generator ("Random Number
Generators: Good Ones are Hard to Find", CACM 31(10), 1988). Normal and
exponential variates follow Law and Kelton, *Simulation Modeling and
Analysis*, 2nd ed.

Each generator owns its own state, so separate instances never disturb each
other's sequences.
'''

from math import log, sqrt

from .constants import EPSILON


class UnitRandom:
    '''
    Uniform reals in [0, 1), from integers in [1, MODULUS - 1].
    '''
    MODULUS = 2147483647
    MULTIPLIER = 16807
    # Schrage's decomposition of MODULUS by MULTIPLIER
    QUOTIENT = 127773
    REMAINDER = 2836
    DEFAULT_SEED = 65521

    def __init__(self, seed=None):
        self.state = type(self).DEFAULT_SEED
        if seed is not None:
            self.seed(seed)

    def seed(self, seed):
        '''
        Restart the sequence. Seeds reducing to 0 would make it degenerate, so
        are nudged into range.
        '''
        modulus = type(self).MODULUS
        if seed <= 0:
            self.state = 1
        elif seed == modulus:
            self.state = modulus - 1
        else:
            self.state = int(seed) % modulus or 1

    def integer(self):
        cls = type(self)
        hi, lo = divmod(self.state, cls.QUOTIENT)
        test = cls.MULTIPLIER * lo - cls.REMAINDER * hi
        self.state = test if test > 0 else test + cls.MODULUS
        return self.state

    def draw(self):
        modulus = type(self).MODULUS
        return (self.integer() - 1) / (modulus - 1)


class UniformRandom:
    '''
    Uniform reals in [a, b), whichever order a and b are given.
    '''

    def __init__(self, a=0.0, b=1.0):
        self.unit = UnitRandom()
        self.set_parameters(a, b)

    def set_parameters(self, a, b):
        self.low = min(a, b)
        self.width = abs(b - a)

    def seed(self, seed):
        self.unit.seed(seed)

    def draw(self):
        return self.low + self.width * self.unit.draw()


class NormalRandom:
    '''
    Normal variates by the polar method, which makes them in pairs.
    '''
    # Starts the second unit generator halfway through the first's period.
    HALFWAY_SEED = 676806766

    def __init__(self, mean=0.0, sd=1.0):
        self.u1 = UnitRandom()
        self.u2 = UnitRandom(type(self).HALFWAY_SEED)
        self.mean = mean
        self.sd = sd
        self.pending = None

    def set_parameters(self, mean, sd):
        # The spare variate of a pair stays good if nothing really changed.
        if abs(mean - self.mean) > EPSILON or abs(sd - self.sd) > EPSILON:
            self.pending = None
        self.mean = mean
        self.sd = sd

    def seed(self, seed1, seed2):
        self.u1.seed(seed1)
        self.u2.seed(seed2)

    def draw(self):
        if self.pending is not None:
            pending, self.pending = self.pending, None
            return pending
        while True:
            v1 = 2.0 * self.u1.draw() - 1.0
            v2 = 2.0 * self.u2.draw() - 1.0
            w = v1 * v1 + v2 * v2
            if EPSILON <= w <= 1.0:
                break
        y = sqrt(-2.0 * log(w) / w)
        self.pending = self.sd * (v2 * y) + self.mean
        return self.sd * (v1 * y) + self.mean


class ExponentialRandom:
    '''
    Exponential variates. The mean is the standard deviation.
    '''

    def __init__(self, sd=1.0):
        self.unit = UnitRandom()
        self.set_parameters(sd)

    def set_parameters(self, sd):
        self.sd = sd

    def seed(self, seed):
        self.unit.seed(seed)

    def draw(self):
        while True:
            v = 1.0 - self.unit.draw()
            if v >= EPSILON:
                return -self.sd * log(v)
