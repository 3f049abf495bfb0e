# src/chipi8/instructions/maps.py
"""
CHIP-8 命令マップとデコードロジック。

上位ニブルでファミリーを選択し、0x0 / 0x8 / 0xE / 0xF のファミリーは
下位ニブルまたは下位バイトで具体的な命令を選択する。
"""
from typing import Callable, Dict, Tuple

from chipi8.core.errors import UnknownOpcodeError
from chipi8.core.operation import Instruction, Operation
from chipi8.instructions import alu, control, graphics, load
from chipi8.instructions.base import ExecFunc, OpcodeFields, extract_fields

# Opcode Entry: (Instruction, Mnemonic, Operand Template, Execution Function)
# Operand Template は OpcodeFields のフィールド名で書式化される。
OpcodeEntry = Tuple[Instruction, str, str, ExecFunc]

# @intent:map 二次セレクタを持たないファミリー（上位ニブル -> 命令）。
FAMILY_MAP: Dict[int, OpcodeEntry] = {
    0x1: (Instruction.JUMP, "JP", "${nnn:03X}", control.jp),
    0x2: (Instruction.CALL, "CALL", "${nnn:03X}", control.call),
    0x3: (Instruction.SKIP_IF_EQUAL, "SE", "V{x:X}, #{nn:02X}", control.se_vx_byte),
    0x4: (Instruction.SKIP_IF_NOT_EQUAL, "SNE", "V{x:X}, #{nn:02X}", control.sne_vx_byte),
    0x5: (Instruction.SKIP_IF_VX_EQUAL_VY, "SE", "V{x:X}, V{y:X}", control.se_vx_vy),
    0x6: (Instruction.SET_VX, "LD", "V{x:X}, #{nn:02X}", load.ld_vx_byte),
    0x7: (Instruction.ADD_VX, "ADD", "V{x:X}, #{nn:02X}", alu.add_vx_byte),
    0x9: (Instruction.SKIP_IF_VX_NOT_VY, "SNE", "V{x:X}, V{y:X}", control.sne_vx_vy),
    0xA: (Instruction.SET_I, "LD", "I, ${nnn:03X}", load.ld_i),
    0xB: (Instruction.JUMP_V0, "JP", "V0, ${nnn:03X}", control.jp_v0),
    0xC: (Instruction.RANDOM, "RND", "V{x:X}, #{nn:02X}", alu.rnd),
    0xD: (Instruction.DRAW, "DRW", "V{x:X}, V{y:X}, {n}", graphics.drw),
}

# @intent:map 0x0 ファミリー（下位ニブルで選択）。
SYSTEM_MAP: Dict[int, OpcodeEntry] = {
    0x0: (Instruction.CLEAR_SCREEN, "CLS", "", graphics.cls),
    0xE: (Instruction.RETURN, "RET", "", control.ret),
}

# @intent:map 0x8 ファミリー（下位ニブルで選択）。
ALU_MAP: Dict[int, OpcodeEntry] = {
    0x0: (Instruction.SET_VX_VY, "LD", "V{x:X}, V{y:X}", alu.ld_vx_vy),
    0x1: (Instruction.SET_VX_OR_VY, "OR", "V{x:X}, V{y:X}", alu.or_vx_vy),
    0x2: (Instruction.SET_VX_AND_VY, "AND", "V{x:X}, V{y:X}", alu.and_vx_vy),
    0x3: (Instruction.SET_VX_XOR_VY, "XOR", "V{x:X}, V{y:X}", alu.xor_vx_vy),
    0x4: (Instruction.ADD_VX_VY, "ADD", "V{x:X}, V{y:X}", alu.add_vx_vy),
    0x5: (Instruction.SUB_VX_VY, "SUB", "V{x:X}, V{y:X}", alu.sub_vx_vy),
    0x6: (Instruction.SHIFT_RIGHT, "SHR", "V{x:X}", alu.shr),
    0x7: (Instruction.SUB_VY_VX, "SUBN", "V{x:X}, V{y:X}", alu.subn_vx_vy),
    0xE: (Instruction.SHIFT_LEFT, "SHL", "V{x:X}", alu.shl),
}

# @intent:map 0xE ファミリー（下位バイトで選択）。
KEY_MAP: Dict[int, OpcodeEntry] = {
    0x9E: (Instruction.SKIP_IF_PRESSED, "SKP", "V{x:X}", control.skp),
    0xA1: (Instruction.SKIP_IF_NOT_PRESSED, "SKNP", "V{x:X}", control.sknp),
}

# @intent:map 0xF ファミリー（下位バイトで選択）。
MISC_MAP: Dict[int, OpcodeEntry] = {
    0x07: (Instruction.SET_VX_TO_DELAY_TIMER, "LD", "V{x:X}, DT", load.ld_vx_dt),
    0x0A: (Instruction.WAIT_FOR_KEY_PRESS, "LD", "V{x:X}, K", control.ld_vx_k),
    0x15: (Instruction.SET_DELAY_TIMER, "LD", "DT, V{x:X}", load.ld_dt_vx),
    0x18: (Instruction.SET_SOUND_TIMER, "LD", "ST, V{x:X}", load.ld_st_vx),
    0x1E: (Instruction.ADD_VX_TO_I, "ADD", "I, V{x:X}", load.add_i_vx),
    0x29: (Instruction.SET_I_TO_SPRITE, "LD", "F, V{x:X}", load.ld_f_vx),
    0x33: (Instruction.STORE_BCD, "LD", "B, V{x:X}", load.ld_b_vx),
    0x55: (Instruction.STORE_REGISTERS, "LD", "[I], V{x:X}", load.ld_i_vx),
    0x65: (Instruction.LOAD_REGISTERS, "LD", "V{x:X}, [I]", load.ld_vx_i),
}

# @intent:map 二次セレクタを持つファミリー: (セレクタ抽出関数, サブマップ)。
SECONDARY_MAP: Dict[int, Tuple[Callable[[OpcodeFields], int], Dict[int, OpcodeEntry]]] = {
    0x0: (lambda f: f.n, SYSTEM_MAP),
    0x8: (lambda f: f.n, ALU_MAP),
    0xE: (lambda f: f.nn, KEY_MAP),
    0xF: (lambda f: f.nn, MISC_MAP),
}


# @intent:responsibility オペコードに対応するエントリを検索します。
# @intent:post-condition 未定義のファミリー/セレクタの場合は UnknownOpcodeError を送出します。
def lookup(opcode: int) -> Tuple[OpcodeEntry, OpcodeFields]:
    fields = extract_fields(opcode)
    family = (opcode & 0xF000) >> 12

    if family in FAMILY_MAP:
        return FAMILY_MAP[family], fields

    selector, sub_map = SECONDARY_MAP[family]
    entry = sub_map.get(selector(fields))
    if entry is None:
        raise UnknownOpcodeError(opcode)
    return entry, fields


# @intent:responsibility オペコードをデコードし、実行記録(Operation)と実行関数を返します。
def decode_opcode(opcode: int) -> Tuple[Operation, ExecFunc, OpcodeFields]:
    entry, fields = lookup(opcode)
    instruction, mnemonic, template, handler = entry
    operands = template.format(**fields._asdict()).split(", ") if template else []
    operation = Operation(
        opcode_hex=f"{opcode:04X}",
        instruction=instruction,
        mnemonic=mnemonic,
        operands=operands,
    )
    return operation, handler, fields
