# src/chipi8/instructions/graphics.py
"""
画面系命令 (CLS, DRW)。
"""
from typing import TYPE_CHECKING

from chipi8.core.operation import PcDisposition
from chipi8.devices.display import SCREEN_WIDTH, SCREEN_HEIGHT
from chipi8.instructions.base import OpcodeFields

if TYPE_CHECKING:
    from chipi8.core.cpu import Chip8Cpu

SPRITE_WIDTH = 8


# 00E0
def cls(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    cpu.display.clear()
    return PcDisposition.next()


# @intent:responsibility Dxyn: Iから読んだnバイトのスプライトを(Vx, Vy)にXOR描画します。
# @intent:note 座標は画面サイズで剰余を取り折り返す（クリップしない）。
#              VFは命令開始時に一度だけ0にし、既に1だったセルに触れた時点で1にする（途中で0に戻さない）。
#              描画座標はVFをクリアする前のVx, Vyを用いる。
def drw(cpu: 'Chip8Cpu', f: OpcodeFields) -> PcDisposition:
    state = cpu.state
    origin_x = state.v[f.x]
    origin_y = state.v[f.y]
    state.vf = 0

    for row in range(f.n):
        sprite = cpu.memory.read(state.i + row)
        for col in range(SPRITE_WIDTH):
            if not sprite & (0x80 >> col):
                continue
            x = (origin_x + col) % SCREEN_WIDTH
            y = (origin_y + row) % SCREEN_HEIGHT
            if cpu.display.get_pixel(x, y):
                state.vf = 1
            cpu.display.draw_pixel(x, y)
    return PcDisposition.next()
