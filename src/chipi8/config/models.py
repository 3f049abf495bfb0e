from dataclasses import dataclass, field
from typing import Dict, Optional

from chipi8.devices.keypad import Keycode

# @intent:constant 一般的なQWERTY配列から16進キーパッドへの割り当て。
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": Keycode.NUM1, "2": Keycode.NUM2, "3": Keycode.NUM3, "4": Keycode.C,
    "Q": Keycode.NUM4, "W": Keycode.NUM5, "E": Keycode.NUM6, "R": Keycode.D,
    "A": Keycode.NUM7, "S": Keycode.NUM8, "D": Keycode.NUM9, "F": Keycode.E,
    "Z": Keycode.A, "X": Keycode.NUM0, "C": Keycode.B, "V": Keycode.F,
}


@dataclass
class EmulatorConfig:
    cycles_per_frame: int = 20
    frames_per_second: int = 60
    scale: int = 8
    rom: Optional[str] = None
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))

    # @intent:responsibility ホストのキー名をCHIP-8のキーコードに変換します。未割り当てのキーはNone。
    def translate_key(self, key_name: str) -> Optional[int]:
        if not key_name:
            return None
        return self.keymap.get(key_name.upper())
