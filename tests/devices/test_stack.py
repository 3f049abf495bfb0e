# tests/devices/test_stack.py
"""
コールスタックの非対称な push/pop の挙動を検証します。
"""
import pytest

from chipi8.core.errors import OutOfRangeError
from chipi8.devices.stack import CallStack, STACK_SIZE


@pytest.fixture
def stack():
    return CallStack()


def test_first_push_does_not_advance(stack):
    stack.push(0x202)
    assert stack.sp == 0
    assert stack.get() == 0x202


def test_second_push_advances(stack):
    stack.push(0x202)
    stack.push(0x302)
    assert stack.sp == 1
    assert stack.slots[:2] == [0x202, 0x302]


def test_pop_reads_before_decrement(stack):
    stack.push(0x202)
    stack.push(0x302)
    assert stack.pop() == 0x302
    assert stack.sp == 0
    assert stack.pop() == 0x202
    assert stack.sp == 0


def test_pop_leaves_slot_contents(stack):
    stack.push(0x202)
    stack.pop()
    # スロット0は0x202のまま残るため、次のpushはSPを進める
    stack.push(0x208)
    assert stack.sp == 1
    assert stack.slots[:2] == [0x202, 0x208]


def test_pop_on_empty_stack(stack):
    assert stack.pop() == 0
    assert stack.sp == 0


def test_overflow(stack):
    for n in range(STACK_SIZE):
        stack.push(0x200 + n * 2)
    assert stack.sp == STACK_SIZE - 1
    with pytest.raises(OutOfRangeError):
        stack.push(0x300)


def test_reset(stack):
    stack.push(0x202)
    stack.push(0x204)
    stack.reset()
    assert stack.sp == 0
    assert stack.slots == [0] * STACK_SIZE
