# src/chipi8/devices/stack.py
"""
サブルーチン呼び出し用の固定長リターンアドレススタック。
"""
from typing import List

from chipi8.core.errors import OutOfRangeError

STACK_SIZE = 16


# @intent:responsibility 16段のリターンアドレススタックを保持します。
# @intent:invariant スタックポインタは負にならない。
# @intent:note push/popは非対称であり、教科書的なスタックに補正してはならない。
#              再帰呼び出し時の挙動がこの非対称性に依存する。
class CallStack:
    """
    CHIP-8のコールスタック。

    push: 現在のスロットが非ゼロの場合に限りSPを進め、その位置に書き込む。
          リセット直後の最初の呼び出しではスロットが0なのでSPは進まない。
    pop:  現在のスロットの値を読み、SP > 0 の場合のみSPを減らす。
          読み出した値は常に返す（減算前に読む）。
    """
    def __init__(self, size: int = STACK_SIZE):
        self._slots: List[int] = [0] * size
        self._sp: int = 0

    @property
    def sp(self) -> int:
        return self._sp

    @property
    def slots(self) -> List[int]:
        return list(self._slots)

    # @intent:responsibility SPを0に戻し、全スロットをゼロクリアします。
    def reset(self) -> None:
        self._slots = [0] * len(self._slots)
        self._sp = 0

    # @intent:responsibility 現在のSPが指すスロットの値を返します。
    def get(self) -> int:
        return self._slots[self._sp]

    # @intent:responsibility 現在のSPが指すスロットに値を書き込みます。
    def set(self, value: int) -> None:
        self._slots[self._sp] = value & 0xFFFF

    def increment_sp(self) -> None:
        if self._sp + 1 >= len(self._slots):
            raise OutOfRangeError(f"Call stack overflow (depth {len(self._slots)}).")
        self._sp += 1

    # @intent:responsibility リターンアドレスを積みます。
    def push(self, address: int) -> None:
        if self.get() != 0:
            self.increment_sp()
        self.set(address)

    # @intent:responsibility リターンアドレスを取り出します。
    def pop(self) -> int:
        value = self._slots[self._sp]
        if self._sp > 0:
            self._sp -= 1
        return value
