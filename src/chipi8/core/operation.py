# src/chipi8/core/operation.py
"""
命令の識別子と実行記録、およびPCの遷移方法を定義するモジュール。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


# @intent:responsibility 実行された命令の記号的な識別子（診断用）。
# @intent:rationale 値にはオペコードのパターン表記を用いる。ニーモニックは命令間で重複するため値にしない。
class Instruction(Enum):
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1nnn"
    CALL = "2nnn"
    SKIP_IF_EQUAL = "3xnn"
    SKIP_IF_NOT_EQUAL = "4xnn"
    SKIP_IF_VX_EQUAL_VY = "5xy0"
    SET_VX = "6xnn"
    ADD_VX = "7xnn"
    SET_VX_VY = "8xy0"
    SET_VX_OR_VY = "8xy1"
    SET_VX_AND_VY = "8xy2"
    SET_VX_XOR_VY = "8xy3"
    ADD_VX_VY = "8xy4"
    SUB_VX_VY = "8xy5"
    SHIFT_RIGHT = "8xy6"
    SUB_VY_VX = "8xy7"
    SHIFT_LEFT = "8xyE"
    SKIP_IF_VX_NOT_VY = "9xy0"
    SET_I = "Annn"
    JUMP_V0 = "Bnnn"
    RANDOM = "Cxnn"
    DRAW = "Dxyn"
    SKIP_IF_PRESSED = "Ex9E"
    SKIP_IF_NOT_PRESSED = "ExA1"
    SET_VX_TO_DELAY_TIMER = "Fx07"
    WAIT_FOR_KEY_PRESS = "Fx0A"
    SET_DELAY_TIMER = "Fx15"
    SET_SOUND_TIMER = "Fx18"
    ADD_VX_TO_I = "Fx1E"
    SET_I_TO_SPRITE = "Fx29"
    STORE_BCD = "Fx33"
    STORE_REGISTERS = "Fx55"
    LOAD_REGISTERS = "Fx65"
    UNKNOWN = "????"


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    実行された命令の詳細（HEX、識別子、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str  # 例: "6005"
    instruction: Instruction
    mnemonic: str  # 例: "LD"
    operands: List[str] = field(default_factory=list)  # 例: ["V0", "#05"]

    @property
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic


# @intent:responsibility PCの遷移方法の種類。
class PcAction(Enum):
    NEXT = "NEXT"  # pc += 2
    SKIP = "SKIP"  # pc += 4
    JUMP = "JUMP"  # pc = address


# @intent:responsibility 1命令の実行後に適用されるPC遷移（タグ付き値）。
# @intent:invariant JUMPの場合のみaddressを持つ。
@dataclass(frozen=True)
class PcDisposition:
    action: PcAction
    address: Optional[int] = None

    def __post_init__(self):
        if (self.action == PcAction.JUMP) != (self.address is not None):
            raise ValueError("Only a JUMP disposition carries an address.")

    @classmethod
    def next(cls) -> 'PcDisposition':
        return _NEXT

    @classmethod
    def skip(cls) -> 'PcDisposition':
        return _SKIP

    @classmethod
    def jump(cls, address: int) -> 'PcDisposition':
        return cls(PcAction.JUMP, address)

    # @intent:responsibility 現在のPCから次のPCを求めます。
    def resolve(self, pc: int) -> int:
        if self.action == PcAction.NEXT:
            return (pc + 2) & 0xFFFF
        if self.action == PcAction.SKIP:
            return (pc + 4) & 0xFFFF
        return self.address & 0xFFFF


_NEXT = PcDisposition(PcAction.NEXT)
_SKIP = PcDisposition(PcAction.SKIP)
