# tests/loader/test_rom.py
import os

import pytest

from chipi8.loader.rom import Rom


def test_from_file(tmp_path):
    path = tmp_path / "PONG.ch8"
    path.write_bytes(bytes([0x6A, 0x02, 0x6B, 0x0C]))

    rom = Rom.from_file(str(path))

    assert rom.title == "PONG.ch8"
    assert rom.path == os.path.abspath(str(path))
    assert rom.data == bytes([0x6A, 0x02, 0x6B, 0x0C])
    assert rom.size == 4
    assert not rom.is_empty


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        Rom.from_file(str(tmp_path / "missing.ch8"))


def test_empty():
    rom = Rom.empty()
    assert rom.is_empty
    assert rom.title == ""
