"""
CHIP-8 命令セット実装パッケージ。
"""
from .maps import decode_opcode, lookup
