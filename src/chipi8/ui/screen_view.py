# src/chipi8/ui/screen_view.py
"""
CHIP-8 画面表示ウィジェット。

フレームバッファのRGBA8バッファを QImage に変換し、スムージング無しで拡大描画します。
"""
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QImage, QPainter, QColor

from chipi8.devices.display import SCREEN_WIDTH, SCREEN_HEIGHT

COLOR_BG = "#101010"


# @intent:responsibility 64x32の画面を指定倍率で表示します。
class ScreenView(QWidget):
    def __init__(self, scale: int = 8, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._image = QImage(SCREEN_WIDTH, SCREEN_HEIGHT, QImage.Format_RGBA8888)
        self._image.fill(QColor(0, 0, 0, 255))
        self.setMinimumSize(SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setFocusPolicy(Qt.StrongFocus)

    @property
    def image(self) -> QImage:
        return self._image

    def set_scale(self, scale: int) -> None:
        self._scale = scale
        self.setMinimumSize(SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale)
        self.update()

    # @intent:responsibility RGBA8バッファから表示用の画像を作り直します。
    # @intent:pre-condition バッファ長は 64 * 32 * 4 バイトであること。
    def set_frame(self, rgba: bytes) -> None:
        expected = SCREEN_WIDTH * SCREEN_HEIGHT * 4
        if len(rgba) != expected:
            raise ValueError(f"Frame buffer must be {expected} bytes, got {len(rgba)}.")
        # QImage はバッファを参照するだけなので copy() で所有させる
        self._image = QImage(rgba, SCREEN_WIDTH, SCREEN_HEIGHT, SCREEN_WIDTH * 4,
                             QImage.Format_RGBA8888).copy()
        self.update()

    # @intent:responsibility 縦横比を保ったまま中央に拡大描画します。
    def _target_rect(self) -> QRect:
        factor = max(1, min(self.width() // SCREEN_WIDTH, self.height() // SCREEN_HEIGHT))
        w, h = SCREEN_WIDTH * factor, SCREEN_HEIGHT * factor
        return QRect((self.width() - w) // 2, (self.height() - h) // 2, w, h)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(COLOR_BG))
        painter.setRenderHint(QPainter.SmoothPixmapTransform, False)
        painter.drawImage(self._target_rect(), self._image)
        painter.end()
