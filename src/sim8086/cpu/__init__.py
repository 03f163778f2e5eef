"""
sim8086 CPU Package
===================

CPU architecture definitions shared by the decoder, the disassembler and
the interpreter.

Modules:
    i8086: Register names and aliasing, register field decode, the
           effective-address table and the short branch opcode table.

Both the decoder (which turns bytes into operands) and the interpreter
(which reads and writes registers) use the same Register definitions, so
the AL/AH/AX aliasing lives in exactly one place.

Usage:
    from sim8086.cpu import Register, decode_register, JumpKind

Copyright (c) 2026 sim8086 Contributors
"""

from sim8086.cpu.i8086 import (
    # Masks and ModR/M field values
    BYTE_MASK,
    HIGH_BYTE_MASK,
    WORD_MASK,
    MOD_MEMORY,
    MOD_MEMORY_DISP8,
    MOD_MEMORY_DISP16,
    MOD_REGISTER,
    RM_DIRECT_ADDRESS,
    # Registers
    Register,
    WORD_REGISTERS,
    BYTE_REGISTERS,
    DUMP_ORDER,
    decode_register,
    # Effective addresses
    EFFECTIVE_ADDRESS_TABLE,
    effective_address_registers,
    # Branches
    JumpKind,
    JUMP_OPCODES,
    SHORT_BRANCH_SIZE,
    get_jump_kind,
    # Immediate group selectors
    IMMEDIATE_GROUP_ADD,
    IMMEDIATE_GROUP_SUB,
    IMMEDIATE_GROUP_CMP,
    # Helpers
    to_signed,
    sign_extend_byte,
)

__all__ = [
    "BYTE_MASK",
    "HIGH_BYTE_MASK",
    "WORD_MASK",
    "MOD_MEMORY",
    "MOD_MEMORY_DISP8",
    "MOD_MEMORY_DISP16",
    "MOD_REGISTER",
    "RM_DIRECT_ADDRESS",
    "Register",
    "WORD_REGISTERS",
    "BYTE_REGISTERS",
    "DUMP_ORDER",
    "decode_register",
    "EFFECTIVE_ADDRESS_TABLE",
    "effective_address_registers",
    "JumpKind",
    "JUMP_OPCODES",
    "SHORT_BRANCH_SIZE",
    "get_jump_kind",
    "IMMEDIATE_GROUP_ADD",
    "IMMEDIATE_GROUP_SUB",
    "IMMEDIATE_GROUP_CMP",
    "to_signed",
    "sign_extend_byte",
]
