# src/chipi8/instructions/control.py
"""
制御系命令 (Jump, Call/Return, 条件スキップ, キー待ち)。
"""
from typing import TYPE_CHECKING

from chipi8.core.operation import PcDisposition
from chipi8.instructions.base import OpcodeFields

if TYPE_CHECKING:
    from chipi8.core.cpu import Chip8Cpu


def _skip_if(condition: bool) -> PcDisposition:
    return PcDisposition.skip() if condition else PcDisposition.next()


# --- Jump / Subroutine ---

# 00EE
def ret(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return PcDisposition.jump(cpu.stack.pop())

# 1nnn
def jp(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return PcDisposition.jump(f.nnn)

# @intent:responsibility 2nnn: 戻り先(PC+2)をスタックに積み、nnnへジャンプします。
# @intent:note スタックの積み方の癖は CallStack.push に委ねる。
def call(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.stack.push(cpu.state.pc + 2)
    return PcDisposition.jump(f.nnn)

# Bnnn
def jp_v0(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return PcDisposition.jump(f.nnn + cpu.state.v[0])


# --- Conditional Skip ---

# 3xnn
def se_vx_byte(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return _skip_if(cpu.state.v[f.x] == f.nn)

# 4xnn
def sne_vx_byte(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return _skip_if(cpu.state.v[f.x] != f.nn)

# 5xy0
def se_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return _skip_if(cpu.state.v[f.x] == cpu.state.v[f.y])

# 9xy0
def sne_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return _skip_if(cpu.state.v[f.x] != cpu.state.v[f.y])


# --- Keypad ---

# Ex9E
def skp(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return _skip_if(cpu.keypad.get_key(cpu.state.v[f.x]))

# ExA1
def sknp(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    return _skip_if(not cpu.keypad.get_key(cpu.state.v[f.x]))

# @intent:responsibility Fx0A: キー押下を待ちます。
# @intent:note ブロックはしない。押下中のキーが無ければPCを据え置き、次サイクルで同じ命令を再実行させる。
#              複数のキーが押下されていれば最も番号の大きいキーを採用する。
def ld_vx_k(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    key = cpu.keypad.highest_pressed()
    if key is None:
        return PcDisposition.jump(cpu.state.pc)
    cpu.state.set_v(f.x, key)
    return PcDisposition.next()
