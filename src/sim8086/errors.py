"""
sim8086 Error Hierarchy
=======================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from Sim8086Error, allowing callers to catch every
package error with a single except clause if desired.

Exception Hierarchy
-------------------
Sim8086Error (base)
├── DecodeError (malformed or unrecognised input, recoverable)
│   ├── UnknownInstructionError - leading byte matches no known encoding
│   └── EndOfInstructionStreamError - byte required but the image ran out
└── ExecutionError (interpreter)
    └── UnsupportedInstructionError - instruction decoded but not executable

Decode errors describe the *input*: the caller aborts the current
disassembly or run and reports the offending byte and address.
UnsupportedInstructionError describes the *interpreter*: the instruction is
valid, the simulator simply has no execution semantics for it. The two are
kept in separate branches so that one is never mistaken for the other.

Copyright (c) 2026 sim8086 Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Sim8086Error(Exception):
    """
    Base exception for all sim8086 errors.

        try:
            listing = I8086Disassembler().disassemble_to_text(image)
        except Sim8086Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Decode Exceptions
# =============================================================================

class DecodeError(Sim8086Error):
    """
    Base exception for instruction decoding failures.

    Attributes:
        address: Offset into the instruction image where decoding failed
                 (None if unknown)
    """

    def __init__(self, message: str, address: Optional[int] = None):
        self.address = address
        super().__init__(message)


class UnknownInstructionError(DecodeError):
    """
    The leading byte of an instruction matches no recognised encoding.

    Also raised for an immediate-group opcode whose selector field names an
    operation outside the supported set (ADC, SBB, AND, OR, XOR).

    Example:
        >>> decode(ByteCursor(bytes([0xF4])))
        UnknownInstructionError: unknown instruction 0xF4 (0b11110100) at 0x0000
    """

    def __init__(self, byte: int, address: int):
        self.byte = byte
        super().__init__(
            f"unknown instruction 0x{byte:02X} (0b{byte:08b}) at 0x{address:04X}",
            address=address,
        )


class EndOfInstructionStreamError(DecodeError):
    """
    A byte was required to complete an instruction but the image ended.

    The address is the offset one past the last byte of the image, i.e.
    where the missing byte would have been.
    """

    def __init__(self, address: Optional[int] = None):
        if address is None:
            message = "unexpected end of instruction stream"
        else:
            message = f"unexpected end of instruction stream at 0x{address:04X}"
        super().__init__(message, address=address)


# =============================================================================
# Execution Exceptions
# =============================================================================

class ExecutionError(Sim8086Error):
    """Base exception for interpreter errors."""
    pass


class UnsupportedInstructionError(ExecutionError):
    """
    A decoded instruction has no execution semantics in the interpreter.

    This marks incomplete execution coverage, not malformed input: the
    same bytes disassemble without error. Memory operands and every
    conditional branch other than JNE land here.

    Attributes:
        instruction: The decoded instruction that could not be executed
        address: Instruction pointer value at which it was fetched
    """

    def __init__(self, instruction: object, address: int, reason: str = ""):
        self.instruction = instruction
        self.address = address
        self.reason = reason
        message = f"unsupported instruction '{instruction}' at 0x{address:04X}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
