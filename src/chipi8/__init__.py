"""
CHIPI-8: CHIP-8 仮想マシン

CPU（命令デコード/実行）、メモリ、レジスタ、コールスタック、タイマ、
キーパッド、モノクロフレームバッファを再現します。
"""

__version__ = "0.1.0"

from .core.cpu import Chip8Cpu
from .core.errors import Chip8Error, UnknownOpcodeError, OutOfRangeError, CpuHaltedError
from .core.operation import Instruction, Operation, PcAction, PcDisposition
from .devices.display import DisplayState
from .emulator import Emulator
from .loader.rom import Rom

__all__ = [
    "Chip8Cpu",
    "Chip8Error",
    "UnknownOpcodeError",
    "OutOfRangeError",
    "CpuHaltedError",
    "Instruction",
    "Operation",
    "PcAction",
    "PcDisposition",
    "DisplayState",
    "Emulator",
    "Rom",
]
