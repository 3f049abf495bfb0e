"""
CPUとUIの間で共有されるレジスタ表示用の型定義。
"""
from typing import List, NamedTuple


# @intent:data_structure 単一のレジスタの表示定義。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

    # @intent:responsibility 16進表示に必要な桁数 (8bit -> 2, 16bit -> 4)。
    @property
    def hex_digits(self) -> int:
        return (self.width + 3) // 4

    def format(self, value: int) -> str:
        return f"{value:0{self.hex_digits}X}"


# @intent:data_structure レジスタグループの表示定義（例: "General", "Pointers", "Timers"）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
