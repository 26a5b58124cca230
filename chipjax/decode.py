"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass


class Op(enum.IntEnum):
    """Every instruction the interpreter understands, plus UNKNOWN."""
    SYS = 0        # 0NNN
    CLS = 1        # 00E0
    RET = 2        # 00EE
    JP = 3         # 1NNN
    CALL = 4       # 2NNN
    SE_IMM = 5     # 3XNN
    SNE_IMM = 6    # 4XNN
    SE_REG = 7     # 5XY0
    LD_IMM = 8     # 6XNN
    ADD_IMM = 9    # 7XNN
    LD_REG = 10    # 8XY0
    OR = 11        # 8XY1
    AND = 12       # 8XY2
    XOR = 13       # 8XY3
    ADD_REG = 14   # 8XY4
    SUB = 15       # 8XY5
    SHR = 16       # 8XY6
    SUBN = 17      # 8XY7
    SHL = 18       # 8XYE
    SNE_REG = 19   # 9XY0
    LD_I = 20      # ANNN
    JP_V0 = 21     # BNNN
    RND = 22       # CXNN
    DRW = 23       # DXYN
    SKP = 24       # EX9E
    SKNP = 25      # EXA1
    LD_VX_DT = 26  # FX07
    LD_KEY = 27    # FX0A
    LD_DT = 28     # FX15
    LD_ST = 29     # FX18
    ADD_I = 30     # FX1E
    LD_F = 31      # FX29
    LD_BCD = 32    # FX33
    LD_MEM = 33    # FX55
    LD_REGS = 34   # FX65
    UNKNOWN = 35


_FAMILY_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_IMM,
    0x4: Op.SNE_IMM,
    0x5: Op.SE_REG,
    0x6: Op.LD_IMM,
    0x7: Op.ADD_IMM,
    0x9: Op.SNE_REG,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_SYSTEM_OPS = {0x00E0: Op.CLS, 0x00EE: Op.RET}

# 8XYN, keyed on N
_ALU_OPS = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

# EXNN, keyed on NN
_KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}

# FXNN, keyed on NN
_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_KEY,
    0x15: Op.LD_DT,
    0x18: Op.LD_ST,
    0x1E: Op.ADD_I,
    0x29: Op.LD_F,
    0x33: Op.LD_BCD,
    0x55: Op.LD_MEM,
    0x65: Op.LD_REGS,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)
    op: Op       # Tagged operation


def classify(instruction: int) -> Op:
    """Map a raw instruction to its operation tag."""
    opcode = (instruction & 0xF000) >> 12
    if opcode == 0x0:
        return _SYSTEM_OPS.get(instruction, Op.SYS)
    if opcode == 0x8:
        return _ALU_OPS.get(instruction & 0x000F, Op.UNKNOWN)
    if opcode == 0xE:
        return _KEY_OPS.get(instruction & 0x00FF, Op.UNKNOWN)
    if opcode == 0xF:
        return _MISC_OPS.get(instruction & 0x00FF, Op.UNKNOWN)
    return _FAMILY_OPS[opcode]


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF,
        op=classify(instruction),
    )
