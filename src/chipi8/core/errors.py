# src/chipi8/core/errors.py
"""
仮想CPUの致命的エラー定義。

エンジン内部には回復可能なエラー経路は存在しません。
ここで定義される例外は全て、CPUを停止させる致命的な事象を表します。
"""


# @intent:responsibility CHIP-8仮想マシンに関する全ての致命的エラーの基底クラス。
class Chip8Error(Exception):
    pass


# @intent:responsibility 未定義のオペコード（ファミリーまたは二次セレクタ）を表します。
class UnknownOpcodeError(Chip8Error, ValueError):
    def __init__(self, opcode: int):
        super().__init__(f"Unknown opcode: {opcode:04X}")
        self.opcode = opcode


# @intent:responsibility メモリ・スタック・キーパッドの範囲外アクセスを表します。
# @intent:rationale 既存の呼び出し側が IndexError として捕捉できるよう多重継承します。
class OutOfRangeError(Chip8Error, IndexError):
    pass


# @intent:responsibility 停止済みのCPUに対してサイクル実行が要求されたことを表します。
class CpuHaltedError(Chip8Error):
    pass
