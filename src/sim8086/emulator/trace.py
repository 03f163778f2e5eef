"""
Execution Trace
===============

One TraceEntry per executed instruction, recording the instruction, where
it was fetched, and the register/flag state on either side of it.

The text form lists only what changed:

    mov cx, word 200 ; cx:0x0->0xc8 ip:0x0->0x3
    sub bx, cx ; bx:0x3e8->0x320 ip:0x5->0x7 flags:->S
    jne $-4 ; ip:0x9->0x7

Copyright (c) 2026 sim8086 Contributors
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import List, Tuple

from sim8086.cpu import WORD_REGISTERS
from sim8086.decoder import Instruction


class Flags(IntFlag):
    """
    Status flags tracked by the interpreter.

    Only the zero and sign flags are modelled; carry, overflow, parity and
    auxiliary carry are not.
    """
    Z = 0x01  # Zero
    S = 0x02  # Sign


def format_flags(flags: Flags) -> str:
    """Render flags as letters in a fixed order (e.g. "ZS", "S", "")."""
    return "".join(flag.name for flag in Flags if flags & flag)


@dataclass(frozen=True)
class TraceEntry:
    """
    Record of one executed instruction.

    Attributes:
        address: Instruction pointer at fetch
        instruction: The executed instruction
        ip_after: Instruction pointer after execution (including any branch)
        registers_before: The eight words in slot order before execution
        registers_after: The eight words in slot order after execution
        flags_before: Flags before execution
        flags_after: Flags after execution
    """
    address: int
    instruction: Instruction
    ip_after: int
    registers_before: Tuple[int, ...]
    registers_after: Tuple[int, ...]
    flags_before: Flags
    flags_after: Flags

    def register_changes(self) -> List[Tuple[str, int, int]]:
        """(name, before, after) for every register word that changed."""
        return [
            (str(reg), before, after)
            for reg, before, after in zip(
                WORD_REGISTERS, self.registers_before, self.registers_after
            )
            if before != after
        ]

    def __str__(self) -> str:
        parts = [f"{name}:0x{before:x}->0x{after:x}"
                 for name, before, after in self.register_changes()]
        parts.append(f"ip:0x{self.address:x}->0x{self.ip_after:x}")
        if self.flags_before != self.flags_after:
            parts.append(
                f"flags:{format_flags(self.flags_before)}->{format_flags(self.flags_after)}"
            )
        return f"{self.instruction} ; {' '.join(parts)}"
