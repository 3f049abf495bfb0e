# src/chipi8/transport/memory.py
"""
Transport Layer (メモリ)

CHIP-8の4096バイトのフラットなアドレス空間を提供します。
0x000-0x04F にはフォント、0x200 以降には ROM が配置されます。
"""
from typing import Iterable

from chipi8.core.errors import OutOfRangeError

MEMORY_SIZE = 4096


# @intent:responsibility 範囲検査付きの8bitメモリを提供します。
class Memory:
    """
    CHIP-8のメインメモリ。
    範囲外アクセスは不正なROMによるものとみなし、致命的エラーとします。
    """
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def _check(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise OutOfRangeError(f"Address {address:#06x} out of bounds for memory of size {self._size}.")

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read(self, address: int) -> int:
        self._check(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        self._check(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility ビッグエンディアンで16bitワード（オペコード）を読み出します。
    def read_word(self, address: int) -> int:
        hi = self.read(address)
        lo = self.read(address + 1)
        return (hi << 8) | lo

    # @intent:responsibility バイト列を指定アドレスから一括で書き込みます。
    # @intent:post-condition 範囲を超える場合は1バイトも書き込まずに例外を送出します。
    def load(self, address: int, data: Iterable[int]) -> None:
        payload = bytes(data)
        if payload:
            self._check(address)
            self._check(address + len(payload) - 1)
        self._memory[address:address + len(payload)] = payload

    # @intent:responsibility 指定範囲をbytesとして返します（ログや検証用）。
    def dump(self, start: int, size: int) -> bytes:
        if size > 0:
            self._check(start)
            self._check(start + size - 1)
        return bytes(self._memory[start:start + size])

    # @intent:responsibility 全領域をゼロクリアします。
    def clear(self) -> None:
        self._memory = bytearray(self._size)

    def get_size(self) -> int:
        return self._size
