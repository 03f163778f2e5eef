"""
Intel 8086 Architecture Definitions
===================================

Shared CPU knowledge used by the decoder, the disassembler and the
interpreter: register names and their aliasing onto physical words, the
register field decode table, the ModR/M effective-address table, and the
short conditional branch opcodes.

Register File
-------------
The 8086 has eight 16-bit general registers. The first four can also be
addressed a byte at a time:

    word   high byte   low byte
    AX     AH          AL
    CX     CH          CL
    DX     DH          DL
    BX     BH          BL
    SP, BP, SI, DI  (word only)

So sixteen register names map onto eight physical slots. Each name
carries the slot index and the bit mask it occupies within the word
(0x00FF, 0xFF00 or 0xFFFF).

Register Field Encoding
-----------------------
A 3-bit register code names a different register depending on the
operand-width bit W:

    code   W=0   W=1
    000    AL    AX
    001    CL    CX
    010    DL    DX
    011    BL    BX
    100    AH    SP
    101    CH    BP
    110    DH    SI
    111    BH    DI

Copyright (c) 2026 sim8086 Contributors
"""

from enum import Enum
from typing import Dict, Optional, Tuple


# =============================================================================
# Constants
# =============================================================================

BYTE_MASK = 0x00FF
HIGH_BYTE_MASK = 0xFF00
WORD_MASK = 0xFFFF

# ModR/M "mod" field values
MOD_MEMORY = 0b00         # memory, no displacement (except r/m 110)
MOD_MEMORY_DISP8 = 0b01   # memory + signed 8-bit displacement
MOD_MEMORY_DISP16 = 0b10  # memory + 16-bit displacement
MOD_REGISTER = 0b11       # register operand

# r/m value that means "direct address" when mod == 00
RM_DIRECT_ADDRESS = 0b110


# =============================================================================
# Registers
# =============================================================================

class Register(Enum):
    """
    Symbolic register names.

    Each member's value is (code, wide, slot, mask):
        code: 3-bit register field encoding
        wide: True for 16-bit registers
        slot: index of the physical 16-bit word (0-7, encoding order)
        mask: bits of that word the register occupies
    """
    AL = (0, False, 0, BYTE_MASK)
    CL = (1, False, 1, BYTE_MASK)
    DL = (2, False, 2, BYTE_MASK)
    BL = (3, False, 3, BYTE_MASK)
    AH = (4, False, 0, HIGH_BYTE_MASK)
    CH = (5, False, 1, HIGH_BYTE_MASK)
    DH = (6, False, 2, HIGH_BYTE_MASK)
    BH = (7, False, 3, HIGH_BYTE_MASK)
    AX = (0, True, 0, WORD_MASK)
    CX = (1, True, 1, WORD_MASK)
    DX = (2, True, 2, WORD_MASK)
    BX = (3, True, 3, WORD_MASK)
    SP = (4, True, 4, WORD_MASK)
    BP = (5, True, 5, WORD_MASK)
    SI = (6, True, 6, WORD_MASK)
    DI = (7, True, 7, WORD_MASK)

    def __init__(self, code: int, wide: bool, slot: int, mask: int):
        self.code = code
        self.wide = wide
        self.slot = slot
        self.mask = mask

    @property
    def shift(self) -> int:
        """Bit position of the register's least significant bit in its word."""
        return 8 if self.mask == HIGH_BYTE_MASK else 0

    @property
    def width_mask(self) -> int:
        """Mask for values held by this register (0xFF or 0xFFFF)."""
        return WORD_MASK if self.wide else BYTE_MASK

    @property
    def sign_bit(self) -> int:
        """Top bit of the register's width."""
        return 0x8000 if self.wide else 0x80

    def __str__(self) -> str:
        return self.name.lower()


# Physical slot order (encoding order) for each word register
WORD_REGISTERS: Tuple[Register, ...] = (
    Register.AX, Register.CX, Register.DX, Register.BX,
    Register.SP, Register.BP, Register.SI, Register.DI,
)

BYTE_REGISTERS: Tuple[Register, ...] = (
    Register.AL, Register.CL, Register.DL, Register.BL,
    Register.AH, Register.CH, Register.DH, Register.BH,
)

# Order used by register dumps
DUMP_ORDER: Tuple[Register, ...] = (
    Register.AX, Register.BX, Register.CX, Register.DX,
    Register.SP, Register.BP, Register.SI, Register.DI,
)


def decode_register(code: int, w: int) -> Register:
    """
    Decode a 3-bit register field.

    Args:
        code: Register field value (only the low 3 bits are used)
        w: Operand-width bit (0 = byte register, 1 = word register)

    Returns:
        The named register
    """
    table = WORD_REGISTERS if w else BYTE_REGISTERS
    return table[code & 0b111]


# =============================================================================
# Effective Address Calculation
# =============================================================================

# Base registers for r/m values 000-111 when mod != 11.
# Entry 110 is BP except in mod 00, where it means a direct address.
EFFECTIVE_ADDRESS_TABLE: Tuple[Tuple[Register, ...], ...] = (
    (Register.BX, Register.SI),
    (Register.BX, Register.DI),
    (Register.BP, Register.SI),
    (Register.BP, Register.DI),
    (Register.SI,),
    (Register.DI,),
    (Register.BP,),
    (Register.BX,),
)


def effective_address_registers(mod: int, rm: int) -> Tuple[Register, ...]:
    """
    Look up the base registers of a memory operand.

    Args:
        mod: ModR/M mod field (00, 01 or 10)
        rm: ModR/M r/m field

    Returns:
        Zero, one or two base registers. Empty only for the direct
        address form (mod 00, r/m 110).
    """
    rm &= 0b111
    if mod == MOD_MEMORY and rm == RM_DIRECT_ADDRESS:
        return ()
    return EFFECTIVE_ADDRESS_TABLE[rm]


# =============================================================================
# Short Conditional Branches and Loops
# =============================================================================

class JumpKind(Enum):
    """
    The twenty short branch/loop forms.

    Each is a 2-byte instruction: opcode followed by a signed 8-bit
    displacement relative to the following instruction. The value is the
    opcode byte.
    """
    JO = 0x70
    JNO = 0x71
    JB = 0x72
    JNB = 0x73
    JE = 0x74
    JNE = 0x75
    JBE = 0x76
    JNBE = 0x77
    JS = 0x78
    JNS = 0x79
    JP = 0x7A
    JNP = 0x7B
    JL = 0x7C
    JNL = 0x7D
    JLE = 0x7E
    JNLE = 0x7F
    LOOPNZ = 0xE0
    LOOPZ = 0xE1
    LOOP = 0xE2
    JCXZ = 0xE3

    @property
    def opcode(self) -> int:
        return self.value

    @property
    def mnemonic(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.mnemonic


JUMP_OPCODES: Dict[int, JumpKind] = {kind.opcode: kind for kind in JumpKind}

SHORT_BRANCH_SIZE = 2


def get_jump_kind(opcode: int) -> Optional[JumpKind]:
    """Return the branch form for an opcode byte, or None."""
    return JUMP_OPCODES.get(opcode)


# =============================================================================
# Immediate Group (opcodes 80-83)
# =============================================================================

# Bits 3-5 of the addressing byte select the operation. Only ADD, SUB and
# CMP are supported; the remaining selectors (OR, ADC, SBB, AND, XOR)
# decode as unknown instructions.
IMMEDIATE_GROUP_ADD = 0b000
IMMEDIATE_GROUP_SUB = 0b101
IMMEDIATE_GROUP_CMP = 0b111


def to_signed(value: int, bits: int) -> int:
    """Interpret an unsigned value as a two's complement number."""
    sign = 1 << (bits - 1)
    value &= (1 << bits) - 1
    return value - (1 << bits) if value & sign else value


def sign_extend_byte(value: int) -> int:
    """Sign-extend an 8-bit value to 16 bits (unsigned result)."""
    return to_signed(value, 8) & WORD_MASK
