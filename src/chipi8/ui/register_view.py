# src/chipi8/ui/register_view.py
"""
CPUのレジスタを表示するウィジェット。
Chip8Cpuのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QLabel, QGroupBox
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from chipi8.common.types import RegisterInfo
from chipi8.core.cpu import Chip8Cpu

GROUP_STYLE = """
    QGroupBox {
        font-weight: bold;
        border: 1px solid #222;
        border-radius: 4px;
        margin-top: 20px;
        color: #EEE;
        background-color: #121212;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        subcontrol-position: top left;
        padding: 0 5px;
        left: 10px;
        color: #00AAAA;
    }
"""


# @intent:responsibility CPUのレジスタ値（V0-VF、I、PC、SP、DT、ST）を表示します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
        self._value_labels: Dict[str, QLabel] = {}
        self._registers: Dict[str, RegisterInfo] = {}
        self._cpu: Optional[Chip8Cpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: Chip8Cpu) -> None:
        self._cpu = cpu
        self._setup_ui()
        self.update_registers()

    def _setup_ui(self) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._value_labels.clear()
        self._registers.clear()

        for group in self._cpu.get_register_layout():
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet(GROUP_STYLE)
            group_layout = QFormLayout(group_box)
            group_layout.setLabelAlignment(Qt.AlignLeft)
            group_layout.setContentsMargins(10, 15, 10, 10)
            group_layout.setSpacing(3)

            for reg in group.registers:
                label_name = QLabel(f"{reg.name}:")
                label_name.setStyleSheet("font-weight: bold; color: #BBBBBB;")
                label_value = QLabel(f"0x{reg.format(0)}")
                label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
                label_value.setAlignment(Qt.AlignRight)
                group_layout.addRow(label_name, label_value)
                self._value_labels[reg.name] = label_value
                self._registers[reg.name] = reg

            self._layout.addWidget(group_box)

        self._layout.addStretch()

    # @intent:responsibility 現在のCPU状態を取得し、表示値を更新します。
    def update_registers(self) -> None:
        if not self._cpu:
            return
        for name, value in self._cpu.get_register_map().items():
            if name in self._value_labels:
                self._value_labels[name].setText(f"0x{self._registers[name].format(value)}")

    def value_text(self, name: str) -> str:
        return self._value_labels[name].text()
