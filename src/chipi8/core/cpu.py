# src/chipi8/core/cpu.py
"""
Core Layer (CHIP-8 CPU)

このモジュールは、CHIP-8仮想マシンの全状態（メモリ、レジスタ、スタック、タイマ、
キーパッド、フレームバッファ）を所有し、フェッチ・デコード・実行サイクルを駆動します。
具体的な命令の振る舞いは Instruction Layer (chipi8.instructions) に移譲されます。
"""
import logging
import random
from typing import Callable, Dict, Iterable, List, Optional

from chipi8.common.fontset import FONTSET
from chipi8.common.types import RegisterInfo, RegisterLayoutInfo
from chipi8.core.errors import Chip8Error, CpuHaltedError
from chipi8.core.operation import Instruction, Operation, PcDisposition
from chipi8.core.state import Chip8CpuState, PROGRAM_START_ADDRESS
from chipi8.devices.display import Display
from chipi8.devices.keypad import Keypad
from chipi8.devices.stack import CallStack
from chipi8.devices.timers import Timers
from chipi8.instructions.maps import decode_opcode
from chipi8.transport.memory import Memory, MEMORY_SIZE

logger = logging.getLogger(__name__)

MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START_ADDRESS

RandomSource = Callable[[], int]


def _default_random_byte() -> int:
    return random.getrandbits(8)


# @intent:responsibility CHIP-8仮想マシンの全状態を一つの集約として所有し、命令サイクルを実行します。
# @intent:rationale 大域的な状態は持たない。実行中のプログラム毎に1インスタンスを生成する。
class Chip8Cpu:
    """
    CHIP-8 CPUをエミュレートするクラス。

    呼び出し側は cycle() を繰り返し呼び出し、任意のバッチ毎に timers.tick() を呼ぶ。
    実時間のペーシングは呼び出し側の責務であり、このクラスは時計を参照しない。
    """
    # @intent:responsibility 全ての周辺デバイスを生成し、フォントをインストールします。
    # @intent:pre-condition random_source を与える場合、0〜255の整数を返す呼び出し可能オブジェクトであること。
    def __init__(self, random_source: Optional[RandomSource] = None):
        self.memory = Memory(MEMORY_SIZE)
        self.state = Chip8CpuState()
        self.stack = CallStack()
        self.timers = Timers()
        self.keypad = Keypad()
        self.display = Display()
        self._random_source: RandomSource = random_source or _default_random_byte
        self._halted: bool = False
        self.cycle_count: int = 0
        self.current_instruction: Instruction = Instruction.UNKNOWN
        self.last_operation: Optional[Operation] = None
        self.init_fontset()

    @property
    def halted(self) -> bool:
        return self._halted

    # @intent:responsibility 注入された乱数源から1バイトを取得します。
    def random_byte(self) -> int:
        return self._random_source() & 0xFF

    # --- Lifecycle ---

    # @intent:responsibility 全状態をゼロに戻し、フォントを再インストールします。
    # @intent:rationale フォントはリセット後もFx29命令から参照されるため、メモリ消去後に書き戻す。
    def reset(self) -> None:
        self.memory.clear()
        self.state = Chip8CpuState()
        self.stack.reset()
        self.timers.reset()
        self.keypad.reset()
        self.display.reset()
        self._halted = False
        self.cycle_count = 0
        self.current_instruction = Instruction.UNKNOWN
        self.last_operation = None
        self.init_fontset()
        logger.debug("CPU reset")

    # @intent:responsibility フォントテーブルを memory[0, 80) にコピーします。
    def init_fontset(self) -> None:
        self.memory.load(0x000, FONTSET)

    # @intent:responsibility ROMを 0x200 から逐語的にコピーします。フォント領域には触れません。
    # @intent:pre-condition ROMは 4096 - 0x200 バイト以下であること。超える場合は何も書き込まない。
    def load_rom(self, data: Iterable[int]) -> None:
        rom = bytes(data)
        if len(rom) > MAX_ROM_SIZE:
            raise ValueError(f"ROM is too large: {len(rom)} bytes (max {MAX_ROM_SIZE}).")
        self.memory.load(PROGRAM_START_ADDRESS, rom)
        logger.info("Loaded %d ROM bytes at %#05x", len(rom), PROGRAM_START_ADDRESS)

    # --- Instruction Cycle ---

    # @intent:responsibility 現在のPCから2バイトを読み、ビッグエンディアンの16bitオペコードを返します。
    def _fetch(self) -> int:
        return self.memory.read_word(self.state.pc)

    # @intent:responsibility CPUを1命令分進めます。
    # @intent:flow フェッチ -> デコード -> 実行 -> PC遷移の適用。PC遷移は NEXT / SKIP / JUMP のいずれか1つ。
    # @intent:post-condition 致命的エラーが発生した場合、CPUを停止状態にして例外を再送出します。
    def cycle(self) -> None:
        if self._halted:
            raise CpuHaltedError(f"CPU is halted at PC {self.state.pc:#05x}; reset required.")

        self.current_instruction = Instruction.UNKNOWN
        try:
            opcode = self._fetch()
            operation, handler, fields = decode_opcode(opcode)
            self.current_instruction = operation.instruction
            self.last_operation = operation
            disposition = handler(self, fields)
        except Chip8Error:
            self._halted = True
            logger.error("CPU halted at PC %#05x", self.state.pc)
            raise

        self._apply(disposition)
        self.cycle_count += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%04X: %s", opcode, operation.text)

    # @intent:responsibility PC遷移を適用します。
    def _apply(self, disposition: PcDisposition) -> None:
        self.state.pc = disposition.resolve(self.state.pc)

    # --- Introspection (UI向け) ---

    # @intent:responsibility 現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self.state
        registers = {f"V{idx:X}": value for idx, value in enumerate(s.v)}
        registers.update({
            "I": s.i,
            "PC": s.pc,
            "SP": self.stack.sp,
            "DT": self.timers.get_delay_timer(),
            "ST": self.timers.get_sound_timer(),
        })
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{idx:X}", 8) for idx in range(16)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [RegisterInfo("DT", 8), RegisterInfo("ST", 8)]),
        ]

    # @intent:responsibility VF（キャリー/ボロー/衝突）と発音状態を辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        return {
            "VF": self.state.vf != 0,
            "SOUND": self.timers.is_sound_active,
            "HALT": self._halted,
        }
