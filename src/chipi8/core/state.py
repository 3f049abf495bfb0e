# src/chipi8/core/state.py
"""
Core Layer (CPU状態)

CHIP-8のレジスタファイル（V0〜VF、インデックスレジスタI、プログラムカウンタ）を保持します。
"""
from dataclasses import dataclass, field
from typing import List

NUM_REGISTERS = 16
PROGRAM_START_ADDRESS = 0x200
FLAG_REGISTER = 0xF


# @intent:responsibility CHIP-8 CPUのレジスタ状態を保持します。エンジンのみが変更します。
@dataclass
class Chip8CpuState:
    """
    CHIP-8 CPUのレジスタ状態。
    VFはキャリー/ボロー/衝突フラグを兼ねます。
    """
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    i: int = 0x0000  # Index Register (16bit)
    pc: int = PROGRAM_START_ADDRESS  # Program Counter (16bit)

    # @intent:accessor フラグレジスタ(VF)へのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    # @intent:responsibility 8ビットにマスクしてVxに書き込みます。
    def set_v(self, index: int, value: int) -> None:
        self.v[index] = value & 0xFF
