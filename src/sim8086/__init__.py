"""
sim8086 - Decoder, Disassembler and Simulator for the Intel 8086
=================================================================

This package decodes raw 8086 machine code for a subset of the
instruction set (MOV, ADD, SUB, CMP and the short conditional branch /
loop forms) and either disassembles it into a NASM listing that
reassembles byte-for-byte, or executes it on a small register/flags
interpreter.

Main Components
---------------
- **cpu**: register model, register decode and effective-address tables
- **decoder**: ByteCursor, operand and instruction model, decode()
- **disassembler**: two-pass whole-image disassembly with branch labels
- **emulator**: fetch-decode-execute interpreter with trace records

Quick Start
-----------
Disassemble an image:
    >>> from sim8086 import I8086Disassembler
    >>> print(I8086Disassembler().disassemble_to_text(bytes([0x89, 0xD9])))
    bits 16
    mov cx, bx

Execute an image:
    >>> from sim8086 import I8086
    >>> cpu = I8086(bytes([0xB8, 0x34, 0x12]))  # mov ax, 0x1234
    >>> _ = cpu.run()
    >>> hex(cpu.registers["ax"])
    '0x1234'

Or use the command-line tool:
    $ sim8086 -d program.bin
    $ sim8086 -s program.bin

Version History
---------------
1.0.0 - Initial release with decoder, disassembler and interpreter
"""

__version__ = "1.0.0"
__author__ = "sim8086 Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from sim8086.errors import (
    Sim8086Error,
    DecodeError,
    UnknownInstructionError,
    EndOfInstructionStreamError,
    ExecutionError,
    UnsupportedInstructionError,
)

from sim8086.cpu import Register, JumpKind

from sim8086.decoder import (
    ByteCursor,
    Memory,
    Immediate8,
    Immediate16,
    Mov,
    Add,
    Sub,
    Cmp,
    Jump,
    decode,
)

from sim8086.disassembler import I8086Disassembler, DisassembledInstruction

from sim8086.emulator import I8086, Flags, TraceEntry

from sim8086.config import Config

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Exception hierarchy
    "Sim8086Error",
    "DecodeError",
    "UnknownInstructionError",
    "EndOfInstructionStreamError",
    "ExecutionError",
    "UnsupportedInstructionError",
    # CPU definitions
    "Register",
    "JumpKind",
    # Decoder
    "ByteCursor",
    "Memory",
    "Immediate8",
    "Immediate16",
    "Mov",
    "Add",
    "Sub",
    "Cmp",
    "Jump",
    "decode",
    # Disassembler
    "I8086Disassembler",
    "DisassembledInstruction",
    # Emulator
    "I8086",
    "Flags",
    "TraceEntry",
    # Configuration
    "Config",
]
