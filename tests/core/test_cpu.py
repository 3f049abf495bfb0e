# tests/core/test_cpu.py
"""
chipi8.core.cpuモジュールの単体テスト。
"""
import logging

import pytest

from chipi8.common.fontset import FONTSET, FONTSET_SIZE
from chipi8.core.cpu import Chip8Cpu, MAX_ROM_SIZE
from chipi8.core.errors import CpuHaltedError, OutOfRangeError, UnknownOpcodeError
from chipi8.core.operation import Instruction
from chipi8.devices.display import DisplayState

# @intent:test_suite 命令サイクル、PC遷移、停止状態、ライフサイクル操作を検証します。


@pytest.fixture
def cpu():
    return Chip8Cpu(random_source=lambda: 0xFF)


def load(cpu, *words):
    data = bytearray()
    for w in words:
        data += bytes(((w >> 8) & 0xFF, w & 0xFF))
    cpu.load_rom(data)


def test_initial_state(cpu):
    assert cpu.state.pc == 0x200
    assert cpu.state.i == 0
    assert cpu.state.v == [0] * 16
    assert cpu.stack.sp == 0
    assert cpu.display.state == DisplayState.NOOP
    assert cpu.memory.dump(0, FONTSET_SIZE) == FONTSET
    assert not cpu.halted


def test_load_and_add(cpu):
    # V0=5; V0+=3
    cpu.load_rom(bytes([0x60, 0x05, 0x70, 0x03]))
    cpu.cycle()
    cpu.cycle()
    assert cpu.state.v[0] == 8
    assert cpu.state.pc == 0x204
    assert cpu.cycle_count == 2


def test_clear_after_draw(cpu):
    # LD I, font(0); DRW V0, V0, 5; CLS
    load(cpu, 0xA000, 0xD005, 0x00E0)
    cpu.cycle()
    cpu.cycle()
    assert cpu.display.state == DisplayState.DRAW
    assert any(any(row) for row in cpu.display.buffer)

    cpu.cycle()
    assert cpu.display.state == DisplayState.CLEAR
    assert not any(any(row) for row in cpu.display.buffer)


def test_store_registers(cpu):
    load(cpu, 0x6011, 0x6122, 0x6233, 0xA300, 0xF255)
    for _ in range(5):
        cpu.cycle()
    assert cpu.memory.dump(0x300, 3) == bytes([0x11, 0x22, 0x33])
    assert cpu.memory.read(0x303) == 0
    assert cpu.state.i == 0x303


def test_sprite_wraps_horizontally(cpu):
    # 0xFF の1行スプライトを x=60 に描画
    load(cpu, 0x603C, 0x6100, 0xA300, 0xD011)
    cpu.memory.write(0x300, 0xFF)
    for _ in range(4):
        cpu.cycle()
    row = cpu.display.buffer[0]
    assert row[60:64] == [1, 1, 1, 1]
    assert row[0:4] == [1, 1, 1, 1]
    assert row[4:60] == [0] * 56
    assert cpu.state.vf == 0


def test_nested_calls_return(cpu):
    # 0x200: CALL 0x300 / 0x300: CALL 0x400 / 0x400: RET / 0x302: RET
    load(cpu, 0x2300)
    cpu.memory.load(0x300, bytes([0x24, 0x00, 0x00, 0xEE]))
    cpu.memory.load(0x400, bytes([0x00, 0xEE]))

    cpu.cycle()
    assert cpu.state.pc == 0x300
    assert cpu.stack.sp == 0
    cpu.cycle()
    assert cpu.state.pc == 0x400
    assert cpu.stack.sp == 1
    cpu.cycle()
    assert cpu.state.pc == 0x302
    assert cpu.stack.sp == 0
    cpu.cycle()
    assert cpu.state.pc == 0x202
    assert cpu.stack.sp == 0


def test_pc_dispositions(cpu):
    # SE V0, #00 (skip) / JP $208 / LD V1, #01 (next)
    load(cpu, 0x3000, 0x0000, 0x1208, 0x0000, 0x6101)
    cpu.cycle()
    assert cpu.state.pc == 0x204
    cpu.cycle()
    assert cpu.state.pc == 0x208
    cpu.cycle()
    assert cpu.state.pc == 0x20A
    assert cpu.state.v[1] == 1


def test_unknown_opcode_halts(cpu):
    cpu.state.pc = 0x200
    cpu.memory.load(0x200, bytes([0xE1, 0x00]))
    with pytest.raises(UnknownOpcodeError) as excinfo:
        cpu.cycle()
    assert excinfo.value.opcode == 0xE100
    assert cpu.halted
    assert cpu.current_instruction == Instruction.UNKNOWN
    assert cpu.state.pc == 0x200

    with pytest.raises(CpuHaltedError):
        cpu.cycle()


def test_out_of_range_read_halts(cpu):
    cpu.state.pc = 0xFFF
    with pytest.raises(OutOfRangeError):
        cpu.cycle()
    assert cpu.halted


def test_reset_clears_halt_and_keeps_font(cpu):
    cpu.memory.load(0x200, bytes([0xFF, 0xFF]))
    with pytest.raises(UnknownOpcodeError):
        cpu.cycle()
    cpu.state.set_v(3, 0x42)
    cpu.timers.set_delay_timer(10)
    cpu.keypad.set_key(5, True)

    cpu.reset()

    assert not cpu.halted
    assert cpu.state.v[3] == 0
    assert cpu.state.pc == 0x200
    assert cpu.timers.get_delay_timer() == 0
    assert not cpu.keypad.get_key(5)
    assert cpu.memory.read(0x200) == 0
    assert cpu.memory.dump(0, FONTSET_SIZE) == FONTSET
    assert cpu.cycle_count == 0
    assert cpu.last_operation is None


def test_load_rom_leaves_font_untouched(cpu):
    cpu.load_rom(bytes([0xAB] * 16))
    assert cpu.memory.dump(0, FONTSET_SIZE) == FONTSET
    assert cpu.memory.dump(0x200, 16) == bytes([0xAB] * 16)


def test_load_rom_accepts_max_size(cpu):
    cpu.load_rom(bytes([0x12] * MAX_ROM_SIZE))
    assert cpu.memory.read(0xFFF) == 0x12


def test_load_rom_rejects_oversized(cpu):
    with pytest.raises(ValueError):
        cpu.load_rom(bytes([0x12] * (MAX_ROM_SIZE + 1)))
    assert cpu.memory.read(0x200) == 0


def test_current_instruction_and_last_operation(cpu):
    load(cpu, 0x6A2B)
    cpu.cycle()
    assert cpu.current_instruction == Instruction.SET_VX
    assert cpu.last_operation.opcode_hex == "6A2B"
    assert cpu.last_operation.text == "LD VA, #2B"


def test_register_map_and_layout(cpu):
    cpu.state.set_v(0xF, 1)
    cpu.state.i = 0x123
    regs = cpu.get_register_map()
    assert regs["VF"] == 1
    assert regs["I"] == 0x123
    assert regs["PC"] == 0x200
    assert set(regs) >= {"SP", "DT", "ST"}

    layout = cpu.get_register_layout()
    names = [r.name for group in layout for r in group.registers]
    assert set(names) == set(regs)

    flags = cpu.get_flag_state()
    assert flags == {"VF": True, "SOUND": False, "HALT": False}


def test_default_random_source_is_byte():
    cpu = Chip8Cpu()
    for _ in range(32):
        assert 0 <= cpu.random_byte() <= 0xFF


def test_cycle_trace_logged_at_debug(cpu, caplog):
    load(cpu, 0x6A2B, 0x6B01)
    with caplog.at_level(logging.DEBUG, logger="chipi8.core.cpu"):
        cpu.cycle()
    assert "6A2B: LD VA, #2B" in caplog.messages

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="chipi8.core.cpu"):
        cpu.cycle()
    assert caplog.records == []
