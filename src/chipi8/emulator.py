# src/chipi8/emulator.py
"""
エミュレータ・ファサード。

フロントエンド（UI）から見た CHIP-8 仮想マシンの操作窓口です。
ROMのロード、サイクルのバッチ実行とタイマ更新、再描画/発音フラグのポーリング、
キー入力の受け渡しを提供します。
"""
import logging
from typing import Optional, Union

from chipi8.core.cpu import Chip8Cpu, MAX_ROM_SIZE, RandomSource
from chipi8.devices.display import DisplayState
from chipi8.loader.rom import Rom

logger = logging.getLogger(__name__)

DEFAULT_CYCLES_PER_FRAME = 20
MAX_FRAMES_PER_SECOND = 60


# @intent:responsibility 仮想マシンと現在のROMを保持し、呼び出し側のフレームループに必要な操作を提供します。
class Emulator:
    def __init__(self, cycles_per_frame: int = DEFAULT_CYCLES_PER_FRAME,
                 random_source: Optional[RandomSource] = None):
        if cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be a positive integer.")
        self.cpu = Chip8Cpu(random_source=random_source)
        self.current_rom: Rom = Rom.empty()
        self.cycles_per_frame = cycles_per_frame

    # @intent:responsibility エミュレーションを停止（VMをリセット）してからROMをロードします。
    # @intent:post-condition 大きすぎるROMはリセット前に拒否し、実行中のROMはそのまま残す。
    def load_rom(self, rom: Union[str, Rom]) -> Rom:
        if not isinstance(rom, Rom):
            rom = Rom.from_file(rom)
        if rom.size > MAX_ROM_SIZE:
            raise ValueError(f"ROM is too large: {rom.size} bytes (max {MAX_ROM_SIZE}).")
        self.stop_emulation()
        self.cpu.load_rom(rom.data)
        self.current_rom = rom
        logger.info("ROM '%s' ready", rom.title)
        return rom

    # @intent:responsibility VMをリセットします。ロード済みのROMの内容もメモリから消えます。
    def stop_emulation(self) -> None:
        self.cpu.reset()
        self.current_rom = Rom.empty()

    # @intent:responsibility 指定数のサイクルを実行し、その後タイマを1回だけ進めます。
    # @intent:pre-condition ROMが未ロードの場合は何もしません。
    def emulate_cycles(self, number_of_cycles: Optional[int] = None) -> None:
        if self.current_rom.is_empty:
            return
        count = self.cycles_per_frame if number_of_cycles is None else number_of_cycles
        for _ in range(count):
            self.cpu.cycle()
        self.cpu.timers.tick()

    def is_draw_flag_set(self) -> bool:
        return self.cpu.display.state == DisplayState.DRAW

    # @intent:responsibility 描画または消去が一度でも行われていれば再描画が必要とみなします。
    def needs_redraw(self) -> bool:
        return self.cpu.display.state != DisplayState.NOOP

    def is_sound_flag_set(self) -> bool:
        return self.cpu.timers.is_sound_active

    def get_color_buffer(self) -> bytes:
        return self.cpu.display.get_color_buffer()

    # @intent:responsibility 変換済みの4bitキーコードの押下/解放をキーパッドに反映します。
    def handle_input(self, key: int, pressed: bool) -> None:
        self.cpu.keypad.set_key(key, pressed)

    @property
    def current_instruction_text(self) -> str:
        op = self.cpu.last_operation
        return op.text if op else ""
