'''
Fixed capacity stack tests
'''

from pytest import raises

from rpncalc.stack import Stack
from rpncalc.util import StackFull, StackEmpty, Underflow


def stack_of(*values, capacity=5):
    s = Stack(capacity)
    for value in values:
        s.push(value)
    return s


def test_capacity_must_be_positive():
    with raises(ValueError):
        Stack(0)


def test_push_pop_round_trip():
    s = stack_of(1.0, 2.0)
    s.push(3.0)
    assert s.pop() == 3.0
    assert len(s) == 2
    assert list(s) == [1.0, 2.0]


def test_push_full():
    s = stack_of(1.0, 2.0, capacity=2)
    with raises(StackFull):
        s.push(3.0)
    assert list(s) == [1.0, 2.0]


def test_pop_empty():
    with raises(StackEmpty):
        Stack(1).pop()


def test_dup():
    s = stack_of(1.0, 2.0)
    s.dup()
    assert list(s) == [1.0, 2.0, 2.0]


def test_dup_bounds():
    with raises(StackEmpty):
        Stack(2).dup()
    s = stack_of(1.0, 2.0, capacity=2)
    with raises(StackFull):
        s.dup()
    assert list(s) == [1.0, 2.0]


def test_swap():
    s = stack_of(1.0, 2.0, 3.0)
    s.swap()
    assert list(s) == [1.0, 3.0, 2.0]
    with raises(Underflow):
        stack_of(1.0).swap()


def test_rotate_moves_bottom_to_top():
    s = stack_of(1.0, 2.0, 3.0, 4.0)
    s.rotate()
    assert list(s) == [2.0, 3.0, 4.0, 1.0]


def test_rotate_short_stacks_unchanged():
    s = Stack(3)
    s.rotate()
    assert list(s) == []
    s.push(1.0)
    s.rotate()
    assert list(s) == [1.0]


def test_drop():
    s = stack_of(1.0, 2.0)
    s.drop()
    assert list(s) == [1.0]
    s.drop()
    with raises(StackEmpty):
        s.drop()


def test_replace_one_keeps_depth():
    s = stack_of(1.0, 2.0, 3.0)
    s.replace(1, 9.0)
    assert list(s) == [1.0, 2.0, 9.0]


def test_replace_two_shrinks_by_one():
    s = stack_of(1.0, 2.0, 3.0)
    s.replace(2, 9.0)
    assert list(s) == [1.0, 9.0]


def test_replace_underflow_leaves_stack():
    s = stack_of(1.0)
    with raises(Underflow):
        s.replace(2, 9.0)
    assert list(s) == [1.0]


def test_peek():
    s = stack_of(1.0, 2.0, 3.0)
    assert s.peek() == 3.0
    assert s.peek(2) == 1.0
    with raises(Underflow):
        s.peek(3)
    with raises(Underflow):
        s.peek(-1)
    assert len(s) == 3


def test_clear_reuses_slots():
    s = stack_of(1.0, 2.0, capacity=2)
    s.clear()
    assert len(s) == 0
    s.push(5.0)
    assert list(s) == [5.0]
