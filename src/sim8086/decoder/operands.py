"""
Operand Model and ModR/M Decoding
=================================

An operand is one of:

    Register     - a symbolic register (sim8086.cpu.Register)
    Memory       - base registers plus an optional displacement
    Immediate8   - a literal byte
    Immediate16  - a literal word

All operand values are immutable and live for one decode step.

The Addressing (ModR/M) Byte
----------------------------
Many opcodes are followed by a byte laid out as:

    7 6   5 4 3   2 1 0
    mod   reg     r/m

    mod 00  memory, no displacement (r/m 110: direct 16-bit address instead)
    mod 01  memory + signed 8-bit displacement
    mod 10  memory + 16-bit displacement
    mod 11  register named by r/m

The reg field names a second register operand (or, for the immediate
group, selects the operation). Displacements follow the addressing byte,
little endian.

Copyright (c) 2026 sim8086 Contributors
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple, Union

from sim8086.cpu import (
    MOD_MEMORY,
    MOD_MEMORY_DISP8,
    MOD_MEMORY_DISP16,
    MOD_REGISTER,
    RM_DIRECT_ADDRESS,
    Register,
    decode_register,
    effective_address_registers,
    to_signed,
)
from sim8086.decoder.cursor import ByteCursor


# =============================================================================
# Operand Types
# =============================================================================

class DisplacementKind(Enum):
    """Size of the displacement carried by a memory operand."""
    NONE = auto()
    DISP8 = auto()
    DISP16 = auto()


@dataclass(frozen=True)
class Memory:
    """
    A memory operand.

    Attributes:
        registers: Zero, one or two base registers. Empty means the
                   displacement is a direct address.
        displacement: Raw (unsigned) displacement value as encoded
        kind: Width of the displacement
    """
    registers: Tuple[Register, ...] = ()
    displacement: int = 0
    kind: DisplacementKind = DisplacementKind.NONE

    @property
    def is_direct(self) -> bool:
        """True for a bare 16-bit address with no base registers."""
        return not self.registers

    @property
    def signed_displacement(self) -> int:
        """Displacement as a signed number (0 when there is none)."""
        if self.kind == DisplacementKind.DISP8:
            return to_signed(self.displacement, 8)
        if self.kind == DisplacementKind.DISP16:
            return to_signed(self.displacement, 16)
        return 0

    def __str__(self) -> str:
        if self.is_direct:
            return f"[{self.displacement}]"

        text = " + ".join(str(reg) for reg in self.registers)
        if self.kind != DisplacementKind.NONE:
            disp = self.signed_displacement
            if disp < 0:
                text += f" - {-disp}"
            else:
                text += f" + {disp}"
        return f"[{text}]"


@dataclass(frozen=True)
class Immediate8:
    """A byte literal (0-255)."""
    value: int

    def __str__(self) -> str:
        return f"byte {self.value}"


@dataclass(frozen=True)
class Immediate16:
    """A word literal (0-65535)."""
    value: int

    def __str__(self) -> str:
        return f"word {self.value}"


Operand = Union[Register, Memory, Immediate8, Immediate16]


# =============================================================================
# Decoding
# =============================================================================

def split_mod_rm(mod_rm: int) -> Tuple[int, int, int]:
    """Split an addressing byte into (mod, reg, r/m)."""
    return (mod_rm >> 6) & 0b11, (mod_rm >> 3) & 0b111, mod_rm & 0b111


def decode_mod_rm(w: int, mod_rm: int, cursor: ByteCursor) -> Operand:
    """
    Decode the mod and r/m fields of an addressing byte.

    Consumes any displacement bytes that follow from the cursor.

    Args:
        w: Operand-width bit, used only when mod selects a register
        mod_rm: The addressing byte (already consumed)
        cursor: Positioned just after the addressing byte

    Returns:
        A Register (mod 11) or Memory operand

    Raises:
        EndOfInstructionStreamError: A displacement byte is missing
    """
    mod, _reg, rm = split_mod_rm(mod_rm)

    if mod == MOD_REGISTER:
        return decode_register(rm, w)

    registers = effective_address_registers(mod, rm)

    if mod == MOD_MEMORY:
        if rm == RM_DIRECT_ADDRESS:
            return Memory((), cursor.try_next_word(), DisplacementKind.DISP16)
        return Memory(registers)

    if mod == MOD_MEMORY_DISP8:
        return Memory(registers, cursor.try_next_byte(), DisplacementKind.DISP8)

    # MOD_MEMORY_DISP16
    assert mod == MOD_MEMORY_DISP16
    return Memory(registers, cursor.try_next_word(), DisplacementKind.DISP16)


def decode_mod_reg_rm(d: int, w: int, cursor: ByteCursor) -> Tuple[Operand, Operand]:
    """
    Read an addressing byte and decode both of its operands.

    The reg field always names a register; the r/m field is a register or
    memory. The direction bit chooses which one is the destination.

    Args:
        d: Direction bit. 0: [rm, reg] (reg is the source);
           1: [reg, rm] (reg is the destination)
        w: Operand-width bit
        cursor: Positioned at the addressing byte

    Returns:
        (destination, source)
    """
    mod_rm = cursor.try_next_byte()
    _mod, reg, _rm = split_mod_rm(mod_rm)

    op_reg = decode_register(reg, w)
    op_rm = decode_mod_rm(w, mod_rm, cursor)

    if d:
        return op_reg, op_rm
    return op_rm, op_reg


def decode_immediate(w: int, cursor: ByteCursor) -> Union[Immediate8, Immediate16]:
    """Read a 1-byte (w=0) or 2-byte little-endian (w=1) immediate."""
    if w:
        return Immediate16(cursor.try_next_word())
    return Immediate8(cursor.try_next_byte())
