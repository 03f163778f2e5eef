"""
Instruction Decoder
===================

Turns the bytes at a cursor into one Instruction.

Decoding is single pass and predictive: the leading byte selects an
encoding family through an opcode-keyed dispatch table, and the family handler
reads exactly the bytes that family requires. Nothing is read ahead and
nothing is pushed back.

Encoding Families
-----------------
    100010dw  mod reg r/m  [disp]            MOV  r/m <-> reg
    1011wreg  data [data]                    MOV  immediate -> reg
    1100011w  mod 000 r/m [disp] data [data] MOV  immediate -> r/m
    1010000w  addr-lo addr-hi                MOV  memory -> accumulator
    1010001w  addr-lo addr-hi                MOV  accumulator -> memory
    000000dw  mod reg r/m  [disp]            ADD  r/m <-> reg
    001010dw  mod reg r/m  [disp]            SUB  r/m <-> reg
    001110dw  mod reg r/m  [disp]            CMP  r/m <-> reg
    100000sw  mod op  r/m [disp] data [data] ADD/SUB/CMP immediate -> r/m
    0000010w  data [data]                    ADD  immediate -> accumulator
    0010110w  data [data]                    SUB  immediate -> accumulator
    0011110w  data [data]                    CMP  immediate -> accumulator
    0111cccc / 111000cc  disp8               conditional branch / loop

Bit meanings: d = direction (1: reg is destination), w = width (1: word),
s = sign-extend an 8-bit immediate to the word operand.

Copyright (c) 2026 sim8086 Contributors
"""

from typing import Callable, Dict, Tuple, Type

from sim8086.cpu import (
    IMMEDIATE_GROUP_ADD,
    IMMEDIATE_GROUP_CMP,
    IMMEDIATE_GROUP_SUB,
    JUMP_OPCODES,
    Register,
    decode_register,
    sign_extend_byte,
    to_signed,
)
from sim8086.decoder.cursor import ByteCursor
from sim8086.decoder.instructions import (
    Add,
    BinaryInstruction,
    Cmp,
    Instruction,
    Jump,
    Mov,
    Sub,
)
from sim8086.decoder.operands import (
    DisplacementKind,
    Immediate8,
    Immediate16,
    Memory,
    decode_immediate,
    decode_mod_reg_rm,
    decode_mod_rm,
    split_mod_rm,
)
from sim8086.errors import EndOfInstructionStreamError, UnknownInstructionError

# Handler signature: (cursor, address of the leading byte) -> Instruction
DecodeHandler = Callable[[ByteCursor, int], Instruction]


# =============================================================================
# Family Handlers
# =============================================================================

def _register_to_either(cls: Type[BinaryInstruction]) -> DecodeHandler:
    """MOV/ADD/SUB/CMP between a register and a register or memory."""

    def handler(cursor: ByteCursor, address: int) -> Instruction:
        opcode = cursor.try_next_byte()
        d = (opcode >> 1) & 1
        w = opcode & 1
        dst, src = decode_mod_reg_rm(d, w, cursor)
        return cls(dst, src, cursor.get_count())

    return handler


def _immediate_to_accumulator(cls: Type[BinaryInstruction]) -> DecodeHandler:
    """ADD/SUB/CMP with an implicit AL or AX destination."""

    def handler(cursor: ByteCursor, address: int) -> Instruction:
        opcode = cursor.try_next_byte()
        w = opcode & 1
        dst = Register.AX if w else Register.AL
        src = decode_immediate(w, cursor)
        return cls(dst, src, cursor.get_count())

    return handler


_IMMEDIATE_GROUP: Dict[int, Type[BinaryInstruction]] = {
    IMMEDIATE_GROUP_ADD: Add,
    IMMEDIATE_GROUP_SUB: Sub,
    IMMEDIATE_GROUP_CMP: Cmp,
}


def _immediate_to_register_memory(cursor: ByteCursor, address: int) -> Instruction:
    """
    ADD/SUB/CMP immediate to register or memory (opcodes 80-83).

    Immediate size:
        w=0        1 byte
        w=1, s=0   2 bytes
        w=1, s=1   1 byte, sign-extended to a word
    """
    opcode = cursor.try_next_byte()
    s = (opcode >> 1) & 1
    w = opcode & 1

    mod_rm = cursor.try_next_byte()
    _mod, selector, _rm = split_mod_rm(mod_rm)
    cls = _IMMEDIATE_GROUP.get(selector)
    if cls is None:
        raise UnknownInstructionError(opcode, address)

    dst = decode_mod_rm(w, mod_rm, cursor)

    if not w:
        src = Immediate8(cursor.try_next_byte())
    elif not s:
        src = Immediate16(cursor.try_next_word())
    else:
        src = Immediate16(sign_extend_byte(cursor.try_next_byte()))

    return cls(dst, src, cursor.get_count())


def _mov_immediate_to_register(cursor: ByteCursor, address: int) -> Instruction:
    """MOV immediate to register (opcodes B0-BF)."""
    opcode = cursor.try_next_byte()
    w = (opcode >> 3) & 1
    dst = decode_register(opcode & 0b111, w)
    src = decode_immediate(w, cursor)
    return Mov(dst, src, cursor.get_count())


def _mov_immediate_to_register_memory(cursor: ByteCursor, address: int) -> Instruction:
    """MOV immediate to register or memory (opcodes C6-C7)."""
    opcode = cursor.try_next_byte()
    w = opcode & 1

    mod_rm = cursor.try_next_byte()
    _mod, selector, _rm = split_mod_rm(mod_rm)
    if selector != 0:
        raise UnknownInstructionError(opcode, address)

    dst = decode_mod_rm(w, mod_rm, cursor)
    src = decode_immediate(w, cursor)
    return Mov(dst, src, cursor.get_count())


def _accumulator_and_memory(cursor: ByteCursor) -> Tuple[Register, Memory]:
    opcode = cursor.try_next_byte()
    w = opcode & 1
    accumulator = Register.AX if w else Register.AL
    memory = Memory((), cursor.try_next_word(), DisplacementKind.DISP16)
    return accumulator, memory


def _mov_memory_to_accumulator(cursor: ByteCursor, address: int) -> Instruction:
    """MOV direct address to AL/AX (opcodes A0-A1)."""
    accumulator, memory = _accumulator_and_memory(cursor)
    return Mov(accumulator, memory, cursor.get_count())


def _mov_accumulator_to_memory(cursor: ByteCursor, address: int) -> Instruction:
    """MOV AL/AX to direct address (opcodes A2-A3)."""
    accumulator, memory = _accumulator_and_memory(cursor)
    return Mov(memory, accumulator, cursor.get_count())


def _short_branch(cursor: ByteCursor, address: int) -> Instruction:
    """Conditional branch / loop with an 8-bit displacement."""
    opcode = cursor.try_next_byte()
    displacement = to_signed(cursor.try_next_byte(), 8)
    return Jump(JUMP_OPCODES[opcode], displacement, cursor.get_count())


# =============================================================================
# Dispatch Table
# =============================================================================

def _build_decode_table() -> Dict[int, DecodeHandler]:
    """
    Build the opcode -> handler table.

    Opcodes absent from the table are unknown instructions.
    """
    table: Dict[int, DecodeHandler] = {}

    def add_range(first: int, last: int, handler: DecodeHandler) -> None:
        for opcode in range(first, last + 1):
            table[opcode] = handler

    add_range(0x88, 0x8B, _register_to_either(Mov))
    add_range(0xB0, 0xBF, _mov_immediate_to_register)
    add_range(0xC6, 0xC7, _mov_immediate_to_register_memory)
    add_range(0xA0, 0xA1, _mov_memory_to_accumulator)
    add_range(0xA2, 0xA3, _mov_accumulator_to_memory)

    add_range(0x00, 0x03, _register_to_either(Add))
    add_range(0x28, 0x2B, _register_to_either(Sub))
    add_range(0x38, 0x3B, _register_to_either(Cmp))
    add_range(0x80, 0x83, _immediate_to_register_memory)
    add_range(0x04, 0x05, _immediate_to_accumulator(Add))
    add_range(0x2C, 0x2D, _immediate_to_accumulator(Sub))
    add_range(0x3C, 0x3D, _immediate_to_accumulator(Cmp))

    for opcode in JUMP_OPCODES:
        table[opcode] = _short_branch

    return table


DECODE_TABLE: Dict[int, DecodeHandler] = _build_decode_table()


# =============================================================================
# Public API
# =============================================================================

def decode(cursor: ByteCursor) -> Instruction:
    """
    Decode one instruction at the cursor.

    Resets the cursor's consumption counter, so the returned instruction's
    size is exactly the number of bytes consumed.

    Args:
        cursor: Positioned at the leading byte of an instruction

    Returns:
        The decoded instruction

    Raises:
        UnknownInstructionError: The leading byte is not a recognised opcode
        EndOfInstructionStreamError: The image ended before the instruction
            was complete (or before it began)

    Example:
        >>> str(decode(ByteCursor(bytes([0x89, 0xD9]))))
        'mov cx, bx'
    """
    cursor.reset_count()

    item = cursor.peek()
    if item is None:
        raise EndOfInstructionStreamError(cursor.position)
    address, opcode = item

    handler = DECODE_TABLE.get(opcode)
    if handler is None:
        raise UnknownInstructionError(opcode, address)

    return handler(cursor, address)


def is_known_opcode(opcode: int) -> bool:
    """Return True if `opcode` begins a recognised instruction family."""
    return opcode in DECODE_TABLE
