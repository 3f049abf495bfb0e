# src/chipi8/devices/display.py
"""
64x32 のモノクロフレームバッファ。

描画状態 (DRAW / CLEAR / NOOP) は最後に書き込んだ操作が勝つ。
呼び出し側はフレーム毎にこの状態をポーリングする。サイクル間で自動的にリセットはされない。
"""
from enum import Enum
from typing import List

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

BLACK_RGBA = bytes((0, 0, 0, 255))
WHITE_RGBA = bytes((255, 255, 255, 255))


# @intent:responsibility フレームバッファの再描画シグナル。
class DisplayState(Enum):
    DRAW = "DRAW"
    CLEAR = "CLEAR"
    NOOP = "NOOP"


# @intent:responsibility 1bitピクセルのグリッドと描画シグナルを保持します。
class Display:
    def __init__(self):
        self.buffer: List[List[int]] = self._blank()
        self.state: DisplayState = DisplayState.NOOP

    @staticmethod
    def _blank() -> List[List[int]]:
        return [[0] * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT)]

    # @intent:responsibility グリッドを消去し、CLEARシグナルを立てます。
    def clear(self) -> None:
        self.buffer = self._blank()
        self.state = DisplayState.CLEAR

    # @intent:responsibility VMリセット時の初期化。シグナルはNOOPに戻す。
    def reset(self) -> None:
        self.buffer = self._blank()
        self.state = DisplayState.NOOP

    def get_pixel(self, x: int, y: int) -> int:
        return self.buffer[y][x]

    # @intent:responsibility 対象セルをXORで反転し、DRAWシグナルを立てます。
    # @intent:note 同じセルへの2回の描画は元の値に戻る（自己逆元）。
    def draw_pixel(self, x: int, y: int) -> None:
        self.state = DisplayState.DRAW
        self.buffer[y][x] ^= 1

    # @intent:responsibility 行優先のRGBA8バッファを生成します。0は不透明の黒、1は不透明の白。
    def get_color_buffer(self) -> bytes:
        out = bytearray()
        for row in self.buffer:
            for pixel in row:
                out += WHITE_RGBA if pixel else BLACK_RGBA
        return bytes(out)
