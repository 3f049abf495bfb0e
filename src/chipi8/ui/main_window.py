# src/chipi8/ui/main_window.py
"""
メインウィンドウの実装。
画面表示・レジスタ表示を保持し、フレームループ（サイクル実行とタイマ更新）を駆動します。
"""
import logging
from typing import Optional

import yaml

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QFileDialog, QMessageBox, QLabel
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent, QKeySequence, QPalette, QColor
from PySide6.QtCore import Qt, QTimer, Slot

from chipi8.config.builder import SystemBuilder
from chipi8.config.loader import ConfigLoader
from chipi8.config.models import EmulatorConfig
from chipi8.core.errors import Chip8Error
from chipi8.emulator import Emulator
from chipi8.loader.rom import ROM_EXTENSIONS
from .register_view import RegisterView
from .screen_view import ScreenView

logger = logging.getLogger(__name__)

APP_TITLE = "CHIPI-8 Emulator"

ROM_FILE_FILTER = "CHIP-8 ROMs ({});;All Files (*)".format(" ".join(f"*{ext}" for ext in ROM_EXTENSIONS))


# @intent:responsibility ホストのキーイベントをキー名（keymapの照合キー）に変換します。
def key_event_name(event: QKeyEvent) -> str:
    return QKeySequence(int(event.key())).toString()


# @intent:responsibility アプリケーションのメインウィンドウ。フレーム毎のペーシングはQTimerが担う。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[EmulatorConfig] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(APP_TITLE)

        self.config = config or EmulatorConfig()
        self.emulator: Emulator = SystemBuilder().build(self.config)
        self._sound_was_active = False

        self._set_dark_theme()
        self._create_screen()
        self._create_status_inspector()
        self._create_menus()

        self.status_label = QLabel("")
        self.statusBar().addPermanentWidget(self.status_label)

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, 1000 // self.config.frames_per_second))
        self._timer.timeout.connect(self._run_frame)

        self._on_emulator_changed()
        self._resume_if_loaded()

    # @intent:responsibility メニューバーを作成します。
    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_file)
        file_menu.addAction(self.load_rom_action)

        self.load_config_action = QAction("Load Config...", self)
        self.load_config_action.triggered.connect(self._load_config_file)
        file_menu.addAction(self.load_config_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop_emulation)
        file_menu.addAction(self.stop_action)

    def _create_screen(self):
        self.screen_view = ScreenView(scale=self.config.scale)
        self.setCentralWidget(self.screen_view)

    def _create_status_inspector(self):
        dock = QDockWidget("Registers", self)
        dock.setAllowedAreas(Qt.RightDockWidgetArea | Qt.LeftDockWidgetArea)
        self.register_view = RegisterView()
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    def _set_dark_theme(self):
        palette = QPalette()
        palette.setColor(QPalette.Window, QColor(29, 29, 29))
        palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        palette.setColor(QPalette.Base, QColor(30, 30, 30))
        palette.setColor(QPalette.Text, QColor(224, 224, 224))
        palette.setColor(QPalette.Button, QColor(53, 53, 53))
        palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        QApplication.setPalette(palette)

    # @intent:responsibility Emulatorが差し替わった、またはROMがロードされた後に表示を同期します。
    def _on_emulator_changed(self):
        self.register_view.set_cpu(self.emulator.cpu)
        self.screen_view.set_frame(self.emulator.get_color_buffer())
        title = self.emulator.current_rom.title
        self.setWindowTitle(f"{APP_TITLE} - {title}" if title else APP_TITLE)
        self._sound_was_active = False

    # @intent:responsibility 1フレーム分のサイクルを実行し、描画・発音・表示を更新します。
    # @intent:note 致命的なVMエラーの場合はタイマを止めてユーザーに通知する。
    @Slot()
    def _run_frame(self):
        try:
            self.emulator.emulate_cycles()
        except Chip8Error as e:
            self._timer.stop()
            logger.error("Emulation stopped: %s", e)
            self.register_view.update_registers()
            QMessageBox.critical(self, "Emulation Error", str(e))
            return

        if self.emulator.needs_redraw():
            self.screen_view.set_frame(self.emulator.get_color_buffer())

        sound = self.emulator.is_sound_flag_set()
        if sound and not self._sound_was_active:
            QApplication.beep()
        self._sound_was_active = sound

        self.register_view.update_registers()
        self.status_label.setText(self.emulator.current_instruction_text)

    @Slot()
    def _load_rom_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", ROM_FILE_FILTER)
        if file_name:
            self.load_rom(file_name)

    # @intent:responsibility ROMをロードしてフレームループを開始します。
    def load_rom(self, file_name: str) -> bool:
        self._timer.stop()
        try:
            self.emulator.load_rom(file_name)
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")
            self._resume_if_loaded()
            return False
        self._on_emulator_changed()
        self._timer.start()
        return True

    @Slot()
    def _load_config_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if not file_name:
            return
        self._timer.stop()
        # @intent:note 設定とEmulatorの両方が揃うまで現在の状態には反映しない。
        try:
            config = ConfigLoader().load_from_file(file_name)
            emulator = SystemBuilder().build(config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            QMessageBox.critical(self, "Error", f"Failed to load config: {e}")
            self._resume_if_loaded()
            return
        self.config = config
        self.emulator = emulator
        self._timer.setInterval(max(1, 1000 // self.config.frames_per_second))
        self.screen_view.set_scale(self.config.scale)
        self._on_emulator_changed()
        self._resume_if_loaded()

    # @intent:responsibility ROMがロード済みであればフレームループを再開します。
    def _resume_if_loaded(self):
        if not self.emulator.current_rom.is_empty:
            self._timer.start()

    @Slot()
    def _stop_emulation(self):
        self._timer.stop()
        self.emulator.stop_emulation()
        self._on_emulator_changed()
        self.status_label.setText("Stopped")

    # @intent:responsibility キー押下/解放をkeymapで変換し、エミュレータに渡します。未割り当てのキーは無視します。
    def keyPressEvent(self, event: QKeyEvent):
        if not self._route_key(event, True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if not self._route_key(event, False):
            super().keyReleaseEvent(event)

    def _route_key(self, event: QKeyEvent, pressed: bool) -> bool:
        if event.isAutoRepeat():
            return True
        key = self.config.translate_key(key_event_name(event))
        if key is None:
            return False
        self.emulator.handle_input(key, pressed)
        return True

    def closeEvent(self, event: QCloseEvent):
        self._timer.stop()
        event.accept()
