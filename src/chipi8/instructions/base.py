# src/chipi8/instructions/base.py
"""
オペコードのオペランド（ニブル/バイト）抽出ロジック。
"""
from typing import Callable, NamedTuple, TYPE_CHECKING

from chipi8.core.operation import PcDisposition

if TYPE_CHECKING:
    from chipi8.core.cpu import Chip8Cpu


# @intent:data_structure オペコードから切り出したオペランド群。
# x = bits 8-11, y = bits 4-7, n = bits 0-3, nn = bits 0-7, nnn = bits 0-11
class OpcodeFields(NamedTuple):
    opcode: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int


# @intent:responsibility 16bitオペコードをオペランド群に分解します。
def extract_fields(opcode: int) -> OpcodeFields:
    return OpcodeFields(
        opcode=opcode,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )


# 命令ハンドラの型: CPU（状態の集約）を変更し、PCの遷移方法を返す。
ExecFunc = Callable[['Chip8Cpu', OpcodeFields], PcDisposition]
