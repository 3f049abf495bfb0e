# src/chipi8/instructions/alu.py
"""
算術論理演算命令の実装。

8bit演算は全て256で剰余を取る。VFへの書き込みは結果の書き込みより先に行う
（x == F の場合は演算結果がVFに残る）。
"""
from typing import TYPE_CHECKING

from chipi8.core.operation import PcDisposition
from chipi8.instructions.base import OpcodeFields

if TYPE_CHECKING:
    from chipi8.core.cpu import Chip8Cpu


# 7xnn (キャリーは立てない)
def add_vx_byte(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, cpu.state.v[f.x] + f.nn)
    return PcDisposition.next()

# 8xy0
def ld_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, cpu.state.v[f.y])
    return PcDisposition.next()

# 8xy1
def or_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, cpu.state.v[f.x] | cpu.state.v[f.y])
    return PcDisposition.next()

# 8xy2
def and_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, cpu.state.v[f.x] & cpu.state.v[f.y])
    return PcDisposition.next()

# 8xy3
def xor_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, cpu.state.v[f.x] ^ cpu.state.v[f.y])
    return PcDisposition.next()

# @intent:responsibility 8xy4: Vx += Vy。符号なしの和が255を超えればVF=1。
def add_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    total = cpu.state.v[f.x] + cpu.state.v[f.y]
    cpu.state.vf = 1 if total > 0xFF else 0
    cpu.state.set_v(f.x, total)
    return PcDisposition.next()

# @intent:responsibility 8xy5: Vx -= Vy。VFは減算前の大小比較 (Vx > Vy) で決まる。
def sub_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    vx, vy = cpu.state.v[f.x], cpu.state.v[f.y]
    cpu.state.vf = 1 if vx > vy else 0
    cpu.state.set_v(f.x, vx - vy)
    return PcDisposition.next()

# 8xy6: VF = Vxの最下位ビット
def shr(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    vx = cpu.state.v[f.x]
    cpu.state.vf = vx & 0x01
    cpu.state.set_v(f.x, vx >> 1)
    return PcDisposition.next()

# @intent:responsibility 8xy7: Vx = Vy - Vx。VFは減算前の大小比較 (Vy > Vx) で決まる。
def subn_vx_vy(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    vx, vy = cpu.state.v[f.x], cpu.state.v[f.y]
    cpu.state.vf = 1 if vy > vx else 0
    cpu.state.set_v(f.x, vy - vx)
    return PcDisposition.next()

# 8xyE: VF = Vxの最上位ビット
def shl(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    vx = cpu.state.v[f.x]
    cpu.state.vf = 1 if vx >= 0x80 else 0
    cpu.state.set_v(f.x, vx << 1)
    return PcDisposition.next()

# @intent:responsibility Cxnn: Vx = 乱数バイト AND nn。乱数源はCPUに注入されたものを使う。
def rnd(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, cpu.random_byte() & f.nn)
    return PcDisposition.next()
