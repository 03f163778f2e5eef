"""
Instruction Model
=================

Decoded instructions are immutable values of one of five types:

    Mov, Add, Sub, Cmp  - two-operand instructions (destination, source)
    Jump                - one of the twenty short conditional branch /
                          loop forms, with a signed 8-bit displacement

Every instruction records its own encoded size in bytes, as counted by the
cursor while it was decoded. The interpreter advances the instruction
pointer by exactly this amount.

Text Form
---------
str(instruction) gives NASM syntax:

    mov cx, bx
    add [bp + si + 4], byte 7
    jne $-2                       (branch relative to its own start)

Inside a listing, branches are rendered against a label instead
(Jump.render_with_label), because a raw displacement is measured from the
end of the instruction while NASM's $ is measured from its start.

Copyright (c) 2026 sim8086 Contributors
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from sim8086.cpu import SHORT_BRANCH_SIZE, WORD_MASK, JumpKind
from sim8086.decoder.operands import Operand


# =============================================================================
# Two-Operand Instructions
# =============================================================================

@dataclass(frozen=True)
class BinaryInstruction:
    """
    Common shape of MOV, ADD, SUB and CMP.

    Attributes:
        dst: Destination operand
        src: Source operand
        size: Encoded length in bytes
    """
    dst: Operand
    src: Operand
    size: int

    MNEMONIC: ClassVar[str] = ""

    @property
    def mnemonic(self) -> str:
        return self.MNEMONIC

    def __str__(self) -> str:
        return f"{self.MNEMONIC} {self.dst}, {self.src}"


@dataclass(frozen=True)
class Mov(BinaryInstruction):
    MNEMONIC: ClassVar[str] = "mov"


@dataclass(frozen=True)
class Add(BinaryInstruction):
    MNEMONIC: ClassVar[str] = "add"


@dataclass(frozen=True)
class Sub(BinaryInstruction):
    MNEMONIC: ClassVar[str] = "sub"


@dataclass(frozen=True)
class Cmp(BinaryInstruction):
    MNEMONIC: ClassVar[str] = "cmp"


# =============================================================================
# Short Branches
# =============================================================================

@dataclass(frozen=True)
class Jump:
    """
    A short conditional branch or loop instruction.

    Attributes:
        kind: Which of the twenty forms (JE, JNE, LOOP, ...)
        displacement: Signed offset (-128..127) from the address immediately
                      after this instruction
        size: Encoded length, always 2
    """
    kind: JumpKind
    displacement: int
    size: int = SHORT_BRANCH_SIZE

    @property
    def mnemonic(self) -> str:
        return self.kind.mnemonic

    def target(self, address: int) -> int:
        """
        Absolute branch target for an instruction located at `address`.

        The displacement counts from the next instruction, so a branch at
        10 with displacement -5 targets 10 + 2 - 5 = 7.
        """
        return (address + self.size + self.displacement) & WORD_MASK

    def render_with_label(self, label: str) -> str:
        return f"{self.mnemonic} {label}"

    def __str__(self) -> str:
        return f"{self.mnemonic} ${self.displacement + self.size:+d}"


Instruction = Union[Mov, Add, Sub, Cmp, Jump]
