"""
Unit Tests for the Instruction Decoder
======================================

Test coverage includes:
- Every supported encoding family (MOV, ADD, SUB, CMP, short branches)
- All ModR/M addressing modes, including the direct-address exception
- Immediate sizing and sign extension in the 80-83 group
- Encoded size accounting
- Unknown opcodes, unsupported group selectors and truncated input

Copyright (c) 2026 sim8086 Contributors
"""

import pytest

from sim8086.cpu import JumpKind, Register
from sim8086.decoder import (
    Add,
    ByteCursor,
    Cmp,
    DisplacementKind,
    Immediate8,
    Immediate16,
    Jump,
    Memory,
    Mov,
    Sub,
    decode,
    is_known_opcode,
)
from sim8086.errors import EndOfInstructionStreamError, UnknownInstructionError


def decode_bytes(*data: int):
    """Decode a single instruction from the given bytes."""
    return decode(ByteCursor(bytes(data)))


# =============================================================================
# MOV Tests
# =============================================================================

class TestMovDecoding:
    """Tests for the five MOV encoding families."""

    def test_register_to_register_word(self):
        """89 D9 -> mov cx, bx (d=0: r/m is the destination)."""
        instr = decode_bytes(0x89, 0xD9)

        assert isinstance(instr, Mov)
        assert instr.dst == Register.CX
        assert instr.src == Register.BX
        assert instr.size == 2
        assert str(instr) == "mov cx, bx"

    def test_register_to_register_byte(self):
        instr = decode_bytes(0x88, 0xE5)

        assert str(instr) == "mov ch, ah"
        assert instr.size == 2

    def test_direction_bit_selects_destination(self):
        """8B D9 has d=1, so the reg field is the destination."""
        instr = decode_bytes(0x8B, 0xD9)

        assert instr.dst == Register.BX
        assert instr.src == Register.CX

    def test_immediate_to_register_word(self):
        """B8 34 12 -> mov ax, 0x1234 with size 3."""
        instr = decode_bytes(0xB8, 0x34, 0x12)

        assert isinstance(instr, Mov)
        assert instr.dst == Register.AX
        assert instr.src == Immediate16(0x1234)
        assert instr.size == 3
        assert str(instr) == "mov ax, word 4660"

    def test_immediate_to_register_byte(self):
        instr = decode_bytes(0xB1, 0x0C)

        assert instr.dst == Register.CL
        assert instr.src == Immediate8(12)
        assert instr.size == 2

    def test_immediate_to_high_byte_register(self):
        """B4 is w=0 with register code 100, which is AH."""
        instr = decode_bytes(0xB4, 0x56)

        assert instr.dst == Register.AH

    def test_memory_no_displacement(self):
        instr = decode_bytes(0x8A, 0x00)

        assert str(instr) == "mov al, [bx + si]"
        assert instr.size == 2

    def test_memory_bp_zero_displacement(self):
        """[bp] has no mod 00 form and is encoded with an 8-bit zero."""
        instr = decode_bytes(0x8B, 0x56, 0x00)

        assert str(instr) == "mov dx, [bp + 0]"
        assert instr.size == 3

    def test_memory_negative_disp8(self):
        instr = decode_bytes(0x8B, 0x41, 0xDB)

        assert str(instr) == "mov ax, [bx + di - 37]"
        assert instr.src.signed_displacement == -37
        assert instr.size == 3

    def test_memory_disp16(self):
        instr = decode_bytes(0x89, 0x8C, 0x87, 0x13)

        assert str(instr) == "mov [si + 4999], cx"
        assert instr.size == 4

    def test_direct_address(self):
        """mod 00 with r/m 110 is a 16-bit direct address, not [bp]."""
        instr = decode_bytes(0x8B, 0x1E, 0x82, 0x0D)

        assert instr.src == Memory((), 3458, DisplacementKind.DISP16)
        assert instr.src.is_direct
        assert str(instr) == "mov bx, [3458]"
        assert instr.size == 4

    def test_immediate_to_memory_byte(self):
        instr = decode_bytes(0xC6, 0x03, 0x07)

        assert str(instr) == "mov [bp + di], byte 7"
        assert instr.size == 3

    def test_immediate_to_memory_word_with_disp16(self):
        """C7 with mod 10: displacement then immediate, six bytes total."""
        instr = decode_bytes(0xC7, 0x85, 0x85, 0x03, 0x5B, 0x01)

        assert str(instr) == "mov [di + 901], word 347"
        assert instr.size == 6

    def test_memory_to_accumulator_word(self):
        instr = decode_bytes(0xA1, 0xFB, 0x09)

        assert str(instr) == "mov ax, [2555]"
        assert instr.size == 3

    def test_memory_to_accumulator_byte_reads_word_address(self):
        """A0 still carries a full 16-bit address."""
        instr = decode_bytes(0xA0, 0x10, 0x00)

        assert str(instr) == "mov al, [16]"
        assert instr.size == 3

    def test_accumulator_to_memory(self):
        instr = decode_bytes(0xA3, 0x0F, 0x00)

        assert instr.dst == Memory((), 15, DisplacementKind.DISP16)
        assert instr.src == Register.AX
        assert str(instr) == "mov [15], ax"


# =============================================================================
# Arithmetic Tests
# =============================================================================

class TestArithmeticDecoding:
    """Tests for ADD, SUB and CMP in all three encoding shapes."""

    def test_add_register_memory(self):
        instr = decode_bytes(0x03, 0x18)

        assert isinstance(instr, Add)
        assert str(instr) == "add bx, [bx + si]"
        assert instr.size == 2

    def test_sub_register_register(self):
        instr = decode_bytes(0x29, 0xD8)

        assert isinstance(instr, Sub)
        assert str(instr) == "sub ax, bx"

    def test_cmp_register_register_byte(self):
        """38 D8 -> cmp al, bl with size 2."""
        instr = decode_bytes(0x38, 0xD8)

        assert isinstance(instr, Cmp)
        assert instr.dst == Register.AL
        assert instr.src == Register.BL
        assert instr.size == 2

    def test_add_immediate_accumulator_byte(self):
        instr = decode_bytes(0x04, 0x09)

        assert str(instr) == "add al, byte 9"
        assert instr.size == 2

    def test_add_immediate_accumulator_word(self):
        instr = decode_bytes(0x05, 0xE8, 0x03)

        assert str(instr) == "add ax, word 1000"
        assert instr.size == 3

    def test_sub_immediate_accumulator(self):
        instr = decode_bytes(0x2C, 0x05)

        assert isinstance(instr, Sub)
        assert instr.dst == Register.AL

    def test_cmp_immediate_accumulator(self):
        instr = decode_bytes(0x3D, 0x0A, 0x00)

        assert isinstance(instr, Cmp)
        assert str(instr) == "cmp ax, word 10"

    def test_group_add_byte(self):
        instr = decode_bytes(0x80, 0xC1, 0x05)

        assert str(instr) == "add cl, byte 5"
        assert instr.size == 3

    def test_group_sub_word(self):
        """81 with s=0: full 16-bit immediate."""
        instr = decode_bytes(0x81, 0xEB, 0x88, 0x13)

        assert str(instr) == "sub bx, word 5000"
        assert instr.size == 4

    def test_group_cmp_direct_address(self):
        instr = decode_bytes(0x80, 0x3E, 0xE2, 0x12, 0x1D)

        assert isinstance(instr, Cmp)
        assert str(instr) == "cmp [4834], byte 29"
        assert instr.size == 5

    def test_group_sign_extended_positive(self):
        instr = decode_bytes(0x83, 0xC6, 0x02)

        assert str(instr) == "add si, word 2"
        assert instr.size == 3

    def test_group_sign_extended_negative(self):
        """83 with a byte of 0xFE yields the word 0xFFFE."""
        instr = decode_bytes(0x83, 0xC6, 0xFE)

        assert instr.src == Immediate16(0xFFFE)
        assert instr.size == 3

    def test_group_cmp_selector(self):
        instr = decode_bytes(0x83, 0xFE, 0x02)

        assert isinstance(instr, Cmp)
        assert instr.dst == Register.SI


# =============================================================================
# Branch Tests
# =============================================================================

class TestBranchDecoding:
    """Tests for the twenty short branch / loop forms."""

    def test_jne(self):
        instr = decode_bytes(0x75, 0xFB)

        assert isinstance(instr, Jump)
        assert instr.kind == JumpKind.JNE
        assert instr.displacement == -5
        assert instr.size == 2

    def test_branch_target(self):
        """A jne at address 10 with displacement -5 targets 7."""
        instr = decode_bytes(0x75, 0xFB)

        assert instr.target(10) == 7

    def test_loop_forms(self):
        assert decode_bytes(0xE0, 0x00).kind == JumpKind.LOOPNZ
        assert decode_bytes(0xE1, 0x00).kind == JumpKind.LOOPZ
        assert decode_bytes(0xE2, 0x00).kind == JumpKind.LOOP
        assert decode_bytes(0xE3, 0x00).kind == JumpKind.JCXZ

    def test_all_conditional_opcodes_decode(self):
        for opcode in range(0x70, 0x80):
            instr = decode_bytes(opcode, 0x00)
            assert isinstance(instr, Jump)
            assert instr.kind.opcode == opcode

    def test_positive_displacement(self):
        instr = decode_bytes(0x74, 0x7F)

        assert instr.displacement == 127


# =============================================================================
# Effective Address Table
# =============================================================================

class TestEffectiveAddresses:
    """All eight r/m memory forms with an 8-bit displacement of 4."""

    EXPECTED = [
        "[bx + si + 4]",
        "[bx + di + 4]",
        "[bp + si + 4]",
        "[bp + di + 4]",
        "[si + 4]",
        "[di + 4]",
        "[bp + 4]",
        "[bx + 4]",
    ]

    def test_disp8_forms(self):
        for rm, expected in enumerate(self.EXPECTED):
            # 8B, mod 01, reg 000 (ax)
            instr = decode_bytes(0x8B, 0b01000000 | rm, 0x04)
            assert str(instr.src) == expected
            assert instr.size == 3

    def test_mod00_forms(self):
        for rm, expected in enumerate(self.EXPECTED):
            if rm == 0b110:
                continue
            instr = decode_bytes(0x8B, rm)
            assert str(instr.src) == expected.replace(" + 4", "")
            assert instr.size == 2


# =============================================================================
# Size Accounting
# =============================================================================

class TestSizeAccounting:
    """Sizes of consecutive instructions sum to the image length."""

    def test_sizes_cover_image(self):
        image = bytes([
            0x89, 0xD9,                          # mov cx, bx
            0xB8, 0x34, 0x12,                    # mov ax, 0x1234
            0xC7, 0x85, 0x85, 0x03, 0x5B, 0x01,  # mov [di + 901], word 347
            0x83, 0xC6, 0x02,                    # add si, 2
            0x75, 0xF2,                          # jne
        ])
        cursor = ByteCursor(image)
        sizes = []
        while not cursor.at_end:
            start = cursor.position
            instr = decode(cursor)
            assert cursor.position - start == instr.size
            sizes.append(instr.size)

        assert sizes == [2, 3, 6, 3, 2]
        assert sum(sizes) == len(image)


# =============================================================================
# Error Tests
# =============================================================================

class TestDecodeErrors:
    """Tests for unknown and truncated input."""

    def test_unknown_opcode(self):
        with pytest.raises(UnknownInstructionError) as exc_info:
            decode_bytes(0xF4)

        assert exc_info.value.byte == 0xF4
        assert exc_info.value.address == 0
        assert "0xF4" in str(exc_info.value)

    def test_unknown_opcode_address(self):
        """The error carries the absolute address of the bad byte."""
        cursor = ByteCursor(bytes([0x89, 0xD9, 0x06]))
        decode(cursor)

        with pytest.raises(UnknownInstructionError) as exc_info:
            decode(cursor)
        assert exc_info.value.address == 2

    def test_segment_push_bytes_are_unknown(self):
        for opcode in (0x06, 0x07, 0x2E, 0x2F, 0x3E, 0x3F):
            assert not is_known_opcode(opcode)
            with pytest.raises(UnknownInstructionError):
                decode_bytes(opcode, 0x00)

    def test_unsupported_group_selector(self):
        """80 with selector 001 (or) is not a supported operation."""
        with pytest.raises(UnknownInstructionError) as exc_info:
            decode_bytes(0x80, 0xC8, 0x05)

        assert exc_info.value.byte == 0x80

    def test_mov_immediate_nonzero_selector(self):
        with pytest.raises(UnknownInstructionError):
            decode_bytes(0xC6, 0xC8, 0x05)

    def test_empty_input(self):
        with pytest.raises(EndOfInstructionStreamError) as exc_info:
            decode(ByteCursor(b""))

        assert exc_info.value.address == 0

    def test_truncated_immediate(self):
        with pytest.raises(EndOfInstructionStreamError) as exc_info:
            decode_bytes(0xB8, 0x34)

        assert exc_info.value.address == 2

    def test_truncated_addressing_byte(self):
        with pytest.raises(EndOfInstructionStreamError):
            decode_bytes(0x8B)

    def test_truncated_displacement(self):
        with pytest.raises(EndOfInstructionStreamError):
            decode_bytes(0x8B, 0x56)

    def test_truncated_branch(self):
        with pytest.raises(EndOfInstructionStreamError):
            decode_bytes(0x75)

    def test_known_opcodes(self):
        assert is_known_opcode(0x88)
        assert is_known_opcode(0xB0)
        assert is_known_opcode(0x83)
        assert is_known_opcode(0xE3)
        assert not is_known_opcode(0x90)
