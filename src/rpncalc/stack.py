from .util import StackFull, StackEmpty, Underflow


class Stack:
    '''
    Fixed capacity stack of floats.

    Slots are allocated once; ``top`` counts the live ones, bottom first, and
    is also the index of the next slot to fill. Slots at or above ``top`` are
    stale.
    '''

    def __init__(self, capacity):
        if capacity <= 0:
            raise ValueError('Stack capacity must be positive, not {}'
                             .format(capacity))
        self.capacity = capacity
        self.values = [0.0] * capacity
        self.top = 0

    def __len__(self):
        return self.top

    def __iter__(self):
        '''
        Yield live values, bottom of the stack first.
        '''
        return iter(self.values[:self.top])

    def __repr__(self):
        return '{}({}, {!r})'.format(type(self).__name__,
                                     self.capacity,
                                     list(self))

    def clear(self):
        self.top = 0

    def push(self, value):
        if self.top == self.capacity:
            raise StackFull('Stack full ({} elements)'.format(self.capacity))
        self.values[self.top] = value
        self.top += 1

    def pop(self):
        if self.top == 0:
            raise StackEmpty('Empty stack')
        self.top -= 1
        return self.values[self.top]

    def dup(self):
        '''
        Duplicate element at top of stack.
        '''
        if self.top == 0:
            raise StackEmpty('Empty stack')
        self.push(self.values[self.top - 1])

    def swap(self):
        '''
        Swap two elements at top of stack.
        '''
        if self.top < 2:
            raise Underflow('Less than 2 element(s) on stack')
        values = self.values
        values[self.top - 1], values[self.top - 2] = \
            values[self.top - 2], values[self.top - 1]

    def rotate(self):
        '''
        Move the bottom element to the top, shifting the rest down one.
        '''
        if self.top < 2:
            return
        live = self.values[:self.top]
        self.values[:self.top] = live[1:] + live[:1]

    def drop(self):
        if self.top == 0:
            raise StackEmpty('Empty stack')
        self.top -= 1

    def replace(self, how_many, value):
        '''
        Replace the top ``how_many`` elements with ``value``.
        '''
        if how_many < 1:
            raise ValueError('Must replace at least 1 element')
        if self.top < how_many:
            raise Underflow('Less than {} element(s) on stack'
                            .format(how_many))
        self.top -= how_many - 1
        self.values[self.top - 1] = value

    def peek(self, down=0):
        '''
        Return element ``down`` from the top; 0 is the top. Stack unchanged.
        '''
        if down < 0 or down >= self.top:
            raise Underflow('Less than {} element(s) on stack'
                            .format(down + 1))
        return self.values[self.top - 1 - down]
