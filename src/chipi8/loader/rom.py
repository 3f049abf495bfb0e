# src/chipi8/loader/rom.py
"""
ROMローダーモジュール。
CHIP-8のROMはヘッダもチェックサムも持たない生のバイト列です。
"""
import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ROM_EXTENSIONS = (".ch8", ".c8", ".rom")


# @intent:responsibility ROMファイルの内容とメタ情報（タイトル、パス、サイズ）を保持します。
@dataclass(frozen=True)
class Rom:
    title: str = ""
    path: str = ""
    data: bytes = field(default=b"", repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    # @intent:responsibility ROMが未ロード（空）であるかを返します。
    @property
    def is_empty(self) -> bool:
        return self.size == 0

    @classmethod
    def empty(cls) -> 'Rom':
        return cls()

    # @intent:responsibility ファイルからROMを読み込みます。タイトルはファイル名。
    # @intent:post-condition ファイルが存在しない場合は OSError がそのまま送出されます。
    @classmethod
    def from_file(cls, file_path: str) -> 'Rom':
        with open(file_path, 'rb') as f:
            data = f.read()
        rom = cls(title=os.path.basename(file_path), path=os.path.abspath(file_path), data=data)
        logger.info("Read ROM '%s' (%d bytes)", rom.title, rom.size)
        return rom
