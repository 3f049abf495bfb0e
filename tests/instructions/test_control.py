# tests/instructions/test_control.py
"""
制御系命令 (ジャンプ、サブルーチン、条件スキップ、キー入力) のテスト。
"""
import pytest

from chipi8.core.cpu import Chip8Cpu


@pytest.fixture
def cpu():
    return Chip8Cpu()


def execute(cpu, opcode):
    cpu.memory.load(cpu.state.pc, bytes([opcode >> 8, opcode & 0xFF]))
    cpu.cycle()


def test_jp(cpu):
    execute(cpu, 0x1ABC)
    assert cpu.state.pc == 0xABC


def test_jp_v0(cpu):
    cpu.state.set_v(0, 0x10)
    execute(cpu, 0xB300)
    assert cpu.state.pc == 0x310


def test_call_pushes_return_address(cpu):
    execute(cpu, 0x2400)
    assert cpu.state.pc == 0x400
    assert cpu.stack.get() == 0x202


@pytest.mark.parametrize("opcode,vx,vy,skipped", [
    (0x3142, 0x42, 0, True),
    (0x3142, 0x41, 0, False),
    (0x4142, 0x41, 0, True),
    (0x4142, 0x42, 0, False),
    (0x5120, 0x07, 0x07, True),
    (0x5120, 0x07, 0x08, False),
    (0x9120, 0x07, 0x08, True),
    (0x9120, 0x07, 0x07, False),
])
def test_conditional_skips(cpu, opcode, vx, vy, skipped):
    cpu.state.set_v(1, vx)
    cpu.state.set_v(2, vy)
    execute(cpu, opcode)
    assert cpu.state.pc == (0x204 if skipped else 0x202)


def test_5xyn_ignores_low_nibble(cpu):
    cpu.state.set_v(1, 3)
    cpu.state.set_v(2, 3)
    execute(cpu, 0x5127)
    assert cpu.state.pc == 0x204


def test_skp_sknp(cpu):
    cpu.state.set_v(4, 0xB)
    execute(cpu, 0xE49E)
    assert cpu.state.pc == 0x202
    execute(cpu, 0xE4A1)
    assert cpu.state.pc == 0x206

    cpu.keypad.set_key(0xB, True)
    execute(cpu, 0xE49E)
    assert cpu.state.pc == 0x20A
    execute(cpu, 0xE4A1)
    assert cpu.state.pc == 0x20C


def test_wait_for_key_holds_pc(cpu):
    execute(cpu, 0xF30A)
    assert cpu.state.pc == 0x200
    cpu.cycle()
    assert cpu.state.pc == 0x200

    cpu.keypad.set_key(0x7, True)
    cpu.cycle()
    assert cpu.state.v[3] == 0x7
    assert cpu.state.pc == 0x202


def test_wait_for_key_takes_highest_pressed(cpu):
    cpu.keypad.set_key(0x2, True)
    cpu.keypad.set_key(0xC, True)
    cpu.keypad.set_key(0x5, True)
    execute(cpu, 0xF00A)
    assert cpu.state.v[0] == 0xC


def test_return_on_empty_stack_reads_slot_zero(cpu):
    execute(cpu, 0x00EE)
    assert cpu.state.pc == 0x000
    assert cpu.stack.sp == 0


def test_system_family_selects_on_low_nibble(cpu):
    from chipi8.core.errors import UnknownOpcodeError
    with pytest.raises(UnknownOpcodeError):
        execute(cpu, 0x0123)
