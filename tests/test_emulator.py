# tests/test_emulator.py
"""
エミュレータ・ファサードのテスト。
"""
import pytest

from chipi8.core.errors import UnknownOpcodeError
from chipi8.emulator import Emulator
from chipi8.loader.rom import Rom


def make_rom(*data):
    return Rom(title="test", path="", data=bytes(data))


@pytest.fixture
def emulator():
    return Emulator(cycles_per_frame=4, random_source=lambda: 0x5A)


def test_no_rom_is_noop(emulator):
    emulator.emulate_cycles()
    assert emulator.cpu.cycle_count == 0
    assert emulator.cpu.state.pc == 0x200


def test_emulate_cycles_then_ticks_timers_once(emulator):
    # LD V0, #05; LD DT, V0; JP $204
    emulator.load_rom(make_rom(0x60, 0x05, 0xF0, 0x15, 0x12, 0x04))
    emulator.emulate_cycles()
    assert emulator.cpu.cycle_count == 4
    assert emulator.cpu.timers.get_delay_timer() == 4

    emulator.emulate_cycles(2)
    assert emulator.cpu.cycle_count == 6
    assert emulator.cpu.timers.get_delay_timer() == 3


def test_load_rom_from_path(emulator, tmp_path):
    path = tmp_path / "IBM.ch8"
    path.write_bytes(bytes([0x00, 0xE0]))
    rom = emulator.load_rom(str(path))
    assert rom.title == "IBM.ch8"
    assert emulator.current_rom is rom


def test_load_rom_resets_vm(emulator):
    emulator.load_rom(make_rom(0x6A, 0x07))
    emulator.emulate_cycles(1)
    emulator.load_rom(make_rom(0x00, 0xE0))
    assert emulator.cpu.state.v[0xA] == 0
    assert emulator.cpu.state.pc == 0x200
    assert emulator.cpu.memory.read(0x200) == 0x00


def test_flags(emulator):
    # LD I, font; DRW V0, V0, 5; LD V1, #02; LD ST, V1
    emulator.load_rom(make_rom(0xA0, 0x00, 0xD0, 0x05, 0x61, 0x02, 0xF1, 0x18))
    assert not emulator.needs_redraw()
    emulator.emulate_cycles()
    assert emulator.is_draw_flag_set()
    assert emulator.needs_redraw()
    assert emulator.is_sound_flag_set()
    buffer = emulator.get_color_buffer()
    assert buffer[0:4] == bytes((255, 255, 255, 255))


def test_handle_input(emulator):
    emulator.handle_input(0xE, True)
    assert emulator.cpu.keypad.get_key(0xE)
    emulator.handle_input(0xE, False)
    assert not emulator.cpu.keypad.get_key(0xE)


def test_stop_emulation(emulator):
    emulator.load_rom(make_rom(0x60, 0x01))
    emulator.stop_emulation()
    assert emulator.current_rom.is_empty
    assert emulator.cpu.memory.read(0x200) == 0


def test_errors_propagate(emulator):
    emulator.load_rom(make_rom(0xFF, 0xFF))
    with pytest.raises(UnknownOpcodeError):
        emulator.emulate_cycles()
    assert emulator.cpu.halted


def test_current_instruction_text(emulator):
    assert emulator.current_instruction_text == ""
    emulator.load_rom(make_rom(0x61, 0x02))
    emulator.emulate_cycles(1)
    assert emulator.current_instruction_text == "LD V1, #02"


def test_invalid_cycles_per_frame():
    with pytest.raises(ValueError):
        Emulator(cycles_per_frame=0)


def test_oversized_rom_keeps_running_rom(emulator):
    emulator.load_rom(make_rom(0x61, 0x02))
    emulator.emulate_cycles(1)
    with pytest.raises(ValueError):
        emulator.load_rom(make_rom(*([0x12] * 0xE01)))
    assert emulator.current_rom.title == "test"
    assert emulator.cpu.memory.read(0x200) == 0x61
    assert emulator.cpu.state.v[1] == 0x02
