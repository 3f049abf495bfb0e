# src/chipi8/devices/keypad.py
"""
16キーのキーパッド。

レベル検出のみを行い、デバウンスやエッジ検出は行わない。
"""
from enum import IntEnum
from typing import List, Optional

from chipi8.core.errors import OutOfRangeError

NUM_KEYS = 16


# @intent:responsibility CHIP-8のキーコード（16進キーパッドの刻印に対応）。
class Keycode(IntEnum):
    NUM0 = 0x0
    NUM1 = 0x1
    NUM2 = 0x2
    NUM3 = 0x3
    NUM4 = 0x4
    NUM5 = 0x5
    NUM6 = 0x6
    NUM7 = 0x7
    NUM8 = 0x8
    NUM9 = 0x9
    A = 0xA
    B = 0xB
    C = 0xC
    D = 0xD
    E = 0xE
    F = 0xF


# @intent:responsibility 16個のキーの押下状態（レベル）を保持します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * NUM_KEYS

    def __len__(self) -> int:
        return len(self._keys)

    def _check(self, key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise OutOfRangeError(f"Key {key:#x} out of range (0x0-0xF).")

    def reset(self) -> None:
        self._keys = [False] * NUM_KEYS

    def set_key(self, key: int, pressed: bool) -> None:
        self._check(key)
        self._keys[key] = bool(pressed)

    def get_key(self, key: int) -> bool:
        self._check(key)
        return self._keys[key]

    # @intent:responsibility 押下中のキーのうち最も番号の大きいものを返します。無ければNone。
    # @intent:rationale キー待ち命令は全キーを走査し、最後に見つかったキーを採用する。
    def highest_pressed(self) -> Optional[int]:
        pressed = None
        for key, state in enumerate(self._keys):
            if state:
                pressed = key
        return pressed
