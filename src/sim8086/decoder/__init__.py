"""
sim8086 Decoder Package
=======================

Byte-level decoding of 8086 machine code into structured instructions.

Modules:
    cursor:       ByteCursor - lookahead reader with per-instruction byte counts
    operands:     Register / Memory / Immediate operands and ModR/M decoding
    instructions: Mov, Add, Sub, Cmp and Jump instruction values
    decode:       decode(cursor) -> Instruction

Usage:
    from sim8086.decoder import ByteCursor, decode

    cursor = ByteCursor(image)
    while not cursor.at_end:
        instruction = decode(cursor)
        print(instruction, instruction.size)

Copyright (c) 2026 sim8086 Contributors
"""

from .cursor import ByteCursor, AddressedByte
from .operands import (
    DisplacementKind,
    Memory,
    Immediate8,
    Immediate16,
    Operand,
    decode_mod_rm,
    decode_mod_reg_rm,
    decode_immediate,
)
from .instructions import (
    BinaryInstruction,
    Mov,
    Add,
    Sub,
    Cmp,
    Jump,
    Instruction,
)
from .decode import decode, is_known_opcode

__all__ = [
    "ByteCursor",
    "AddressedByte",
    "DisplacementKind",
    "Memory",
    "Immediate8",
    "Immediate16",
    "Operand",
    "decode_mod_rm",
    "decode_mod_reg_rm",
    "decode_immediate",
    "BinaryInstruction",
    "Mov",
    "Add",
    "Sub",
    "Cmp",
    "Jump",
    "Instruction",
    "decode",
    "is_known_opcode",
]
