'''
Running sums for two-variable statistics and least-squares regression.
'''

from math import sqrt


def _sample_stddev(total, total_squares, n):
    '''
    sqrt(sum((x - mean)^2) / (n - 1)), from running sums.
    '''
    if n < 2:
        return 0.0
    mean = total / n
    variance = (total_squares - 2.0 * mean * total + n * mean * mean) / (n - 1)
    # Cancellation can leave a tiny negative instead of 0.
    return sqrt(max(variance, 0.0))


def stddev(values):
    '''
    Return sample standard deviation of values, 0 for fewer than two.
    '''
    values = list(values)
    return _sample_stddev(sum(values),
                          sum(value * value for value in values),
                          len(values))


class Statistics:
    '''
    Accumulated (x, y) points.

    Only ``add`` and ``clear`` change anything. Derived values need two or
    more points to mean anything and are 0 otherwise.
    '''

    def __init__(self):
        self.clear()

    def __repr__(self):
        return ('{}(n={}, sum_x={}, sum_y={}, sum_xx={}, sum_yy={}, '
                'sum_xy={})').format(type(self).__name__, self.n,
                                     self.sum_x, self.sum_y,
                                     self.sum_xx, self.sum_yy, self.sum_xy)

    def clear(self):
        self.sum_x = self.sum_y = 0.0
        self.sum_xx = self.sum_yy = self.sum_xy = 0.0
        self.n = 0.0

    def add(self, x, y):
        self.sum_x += x
        self.sum_y += y
        self.sum_xx += x * x
        self.sum_yy += y * y
        self.sum_xy += x * y
        self.n += 1

    @property
    def mean_x(self):
        return self.sum_x / self.n if self.n else 0.0

    @property
    def mean_y(self):
        return self.sum_y / self.n if self.n else 0.0

    @property
    def stddev_x(self):
        return _sample_stddev(self.sum_x, self.sum_xx, self.n)

    @property
    def stddev_y(self):
        return _sample_stddev(self.sum_y, self.sum_yy, self.n)

    def _denominator(self):
        return self.n * self.sum_xx - self.sum_x * self.sum_x

    @property
    def slope(self):
        '''
        a in y = ax + b.
        '''
        denominator = self._denominator()
        if denominator == 0.0:
            return 0.0
        return (self.n * self.sum_xy - self.sum_x * self.sum_y) / denominator

    @property
    def intercept(self):
        '''
        b in y = ax + b.
        '''
        denominator = self._denominator()
        if denominator == 0.0:
            return 0.0
        return (self.sum_xx * self.sum_y -
                self.sum_x * self.sum_xy) / denominator

    @property
    def correlation(self):
        denominator = self._denominator() * (self.n * self.sum_yy -
                                             self.sum_y * self.sum_y)
        if denominator <= 0.0:
            return 0.0
        return (self.n * self.sum_xy -
                self.sum_x * self.sum_y) / sqrt(denominator)
