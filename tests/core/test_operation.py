# tests/core/test_operation.py
import pytest

from chipi8.core.operation import Instruction, Operation, PcAction, PcDisposition


def test_next_and_skip():
    assert PcDisposition.next().resolve(0x200) == 0x202
    assert PcDisposition.skip().resolve(0x200) == 0x204
    assert PcDisposition.next() is PcDisposition.next()


def test_jump():
    d = PcDisposition.jump(0x345)
    assert d.action == PcAction.JUMP
    assert d.resolve(0x200) == 0x345


def test_jump_to_self_holds_pc():
    assert PcDisposition.jump(0x210).resolve(0x210) == 0x210


def test_only_jump_carries_address():
    with pytest.raises(ValueError):
        PcDisposition(PcAction.NEXT, 0x200)
    with pytest.raises(ValueError):
        PcDisposition(PcAction.JUMP)


def test_operation_text():
    op = Operation("8124", Instruction.ADD_VX_VY, "ADD", ["V1", "V2"])
    assert op.text == "ADD V1, V2"
    assert Operation("00E0", Instruction.CLEAR_SCREEN, "CLS").text == "CLS"


def test_instruction_values_are_unique():
    values = [i.value for i in Instruction]
    assert len(values) == len(set(values))
