# src/chipi8/instructions/load.py
"""
ロード/ストア系命令 (レジスタ、インデックス、タイマ、メモリ転送)。
"""
from typing import TYPE_CHECKING

from chipi8.common.fontset import FONT_GLYPH_SIZE
from chipi8.core.operation import PcDisposition
from chipi8.instructions.base import OpcodeFields

if TYPE_CHECKING:
    from chipi8.core.cpu import Chip8Cpu


# 6xnn
def ld_vx_byte(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, f.nn)
    return PcDisposition.next()

# Annn
def ld_i(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.i = f.nnn
    return PcDisposition.next()


# --- Timers ---

# Fx07
def ld_vx_dt(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.set_v(f.x, cpu.timers.get_delay_timer())
    return PcDisposition.next()

# Fx15
def ld_dt_vx(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.timers.set_delay_timer(cpu.state.v[f.x])
    return PcDisposition.next()

# Fx18
def ld_st_vx(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.timers.set_sound_timer(cpu.state.v[f.x])
    return PcDisposition.next()


# --- Index Register ---

# @intent:responsibility Fx1E: I += Vx (16bit)。結果が0xFFFを超えればVF=1。
def add_i_vx(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.i = (cpu.state.i + cpu.state.v[f.x]) & 0xFFFF
    cpu.state.vf = 1 if cpu.state.i > 0xFFF else 0
    return PcDisposition.next()

# Fx29: フォントグリフの先頭アドレス
def ld_f_vx(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.state.i = cpu.state.v[f.x] * FONT_GLYPH_SIZE
    return PcDisposition.next()


# --- Memory Transfer ---

# @intent:responsibility Fx33: Vxを3桁のBCDとして memory[I..I+3) に格納します。
def ld_b_vx(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    value = cpu.state.v[f.x]
    base = cpu.state.i
    cpu.memory.write(base, value // 100)
    cpu.memory.write(base + 1, (value // 10) % 10)
    cpu.memory.write(base + 2, value % 10)
    return PcDisposition.next()

# @intent:responsibility Fx55: V0..Vx を memory[I..I+x+1) に格納し、Iをx+1進めます。
def ld_i_vx(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    base = cpu.state.i
    for r in range(f.x + 1):
        cpu.memory.write(base + r, cpu.state.v[r])
    cpu.state.i = (base + f.x + 1) & 0xFFFF
    return PcDisposition.next()

# @intent:responsibility Fx65: memory[I..I+x+1) を V0..Vx に読み込み、Iをx+1進めます。
def ld_vx_i(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    base = cpu.state.i
    for r in range(f.x + 1):
        cpu.state.set_v(r, cpu.memory.read(base + r))
    cpu.state.i = (base + f.x + 1) & 0xFFFF
    return PcDisposition.next()
