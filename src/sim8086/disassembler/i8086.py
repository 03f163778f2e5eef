"""
8086 Disassembler
=================

Disassembles a raw 8086 program image into a NASM listing that reassembles
to the same bytes.

Two Passes
----------
1. Decode sequentially from offset 0 to the end of the image. For every
   branch/loop instruction compute its absolute target (address after the
   instruction + displacement) and give it a label, numbered in the order
   targets are first seen.
2. Walk the decoded instructions again, emitting `labelN:` before any
   instruction that is a branch target and rendering branches as
   `<mnemonic> labelN` instead of a raw displacement.

Labels are required for the round trip: the encoded displacement counts
from the end of the branch, while an assembler resolves a numeric operand
from a different reference point. A label is resolved the same way by
both.

A target that does not fall on an instruction boundary (or the end of the
image) cannot carry a label line; such a branch keeps its `$`-relative
form, which still reassembles to the same displacement.

Usage:
    disasm = I8086Disassembler()
    print(disasm.disassemble_to_text(image))

    for instr in disasm.disassemble(image):
        print(f"{instr.address:04X}: {instr.text}")

Copyright (c) 2026 sim8086 Contributors
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from sim8086.decoder import ByteCursor, Instruction, Jump, decode
from sim8086.errors import DecodeError

logger = logging.getLogger(__name__)

LISTING_HEADER = "bits 16"


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class DisassembledInstruction:
    """
    A decoded instruction placed at its address in the image.

    Attributes:
        address: Offset of the instruction's first byte
        instruction: The decoded instruction
        raw_bytes: The bytes the instruction was decoded from
        label: Label declared at this address (if it is a branch target)
        target_label: Label this branch refers to (branches only)
    """
    address: int
    instruction: Instruction
    raw_bytes: bytes
    label: Optional[str] = None
    target_label: Optional[str] = None

    @property
    def size(self) -> int:
        return self.instruction.size

    @property
    def mnemonic(self) -> str:
        return self.instruction.mnemonic

    @property
    def text(self) -> str:
        """Assembly text, using the target label for branches when known."""
        if isinstance(self.instruction, Jump) and self.target_label:
            return self.instruction.render_with_label(self.target_label)
        return str(self.instruction)

    def __str__(self) -> str:
        """Format as ADDRESS: BYTES  TEXT"""
        hex_bytes = " ".join(f"{b:02X}" for b in self.raw_bytes)
        # Longest supported encoding is 6 bytes
        hex_bytes = hex_bytes.ljust(17)
        return f"{self.address:04X}: {hex_bytes}  {self.text}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"0x{self.address:04X}",
            "address_int": self.address,
            "mnemonic": self.mnemonic,
            "text": self.text,
            "size": self.size,
            "bytes": [f"0x{b:02X}" for b in self.raw_bytes],
            "label": self.label,
        }


# =============================================================================
# 8086 Disassembler
# =============================================================================

class I8086Disassembler:
    """
    Whole-image disassembler for the supported 8086 subset.

    Decoding stops at the first error: an unknown opcode or a truncated
    instruction raises and no partial listing is produced.

    Attributes:
        label_prefix: Prefix for generated labels ("label" -> label0, label1, ...)
    """

    def __init__(self, label_prefix: str = "label"):
        self.label_prefix = label_prefix

    def disassemble_one(self, data: bytes, offset: int = 0) -> DisassembledInstruction:
        """
        Decode a single instruction.

        Args:
            data: The program image
            offset: Address of the instruction within the image

        Raises:
            UnknownInstructionError: Unrecognised leading byte
            EndOfInstructionStreamError: Instruction runs past the image
        """
        cursor = ByteCursor(data, offset)
        instruction = decode(cursor)
        return DisassembledInstruction(
            address=offset,
            instruction=instruction,
            raw_bytes=bytes(data[offset:offset + instruction.size]),
        )

    def disassemble(self, data: bytes) -> List[DisassembledInstruction]:
        """
        Decode the whole image and resolve branch labels.

        Args:
            data: The program image

        Returns:
            Instructions in address order, with label and target_label set

        Raises:
            DecodeError: On the first undecodable instruction
        """
        cursor = ByteCursor(data)
        result: List[DisassembledInstruction] = []

        # Pass 1: decode and collect branch targets in first-seen order
        targets: List[int] = []
        while not cursor.at_end:
            address = cursor.position
            try:
                instruction = decode(cursor)
            except DecodeError as e:
                logger.warning(f"Disassembly aborted at 0x{address:04X}: {e}")
                raise
            result.append(DisassembledInstruction(
                address=address,
                instruction=instruction,
                raw_bytes=bytes(data[address:address + instruction.size]),
            ))
            if isinstance(instruction, Jump):
                target = instruction.target(address)
                if target not in targets:
                    targets.append(target)

        logger.debug(
            f"Decoded {len(result)} instructions, {len(targets)} branch targets"
        )

        labels = self._assign_labels(targets, result, len(data))

        # Pass 2: attach labels
        for instr in result:
            instr.label = labels.get(instr.address)
            if isinstance(instr.instruction, Jump):
                instr.target_label = labels.get(instr.instruction.target(instr.address))

        return result

    def _assign_labels(
        self,
        targets: List[int],
        instructions: List[DisassembledInstruction],
        end: int,
    ) -> Dict[int, str]:
        """
        Number branch targets that can carry a label line.

        Args:
            targets: Branch targets in first-seen order
            instructions: Decoded instructions (defines the boundaries)
            end: Image length; a branch to the end gets a trailing label

        Returns:
            Mapping of address -> label name
        """
        boundaries = {instr.address for instr in instructions}
        boundaries.add(end)

        labels: Dict[int, str] = {}
        for target in targets:
            if target not in boundaries:
                logger.debug(f"Branch target 0x{target:04X} is not an instruction boundary")
                continue
            labels[target] = f"{self.label_prefix}{len(labels)}"
        return labels

    def disassemble_to_text(self, data: bytes) -> str:
        """
        Disassemble and return a reassemblable listing.

        Output is a `bits 16` line followed by one label or instruction per
        line, newline terminated.
        """
        instructions = self.disassemble(data)

        lines = [LISTING_HEADER]
        for instr in instructions:
            if instr.label:
                lines.append(f"{instr.label}:")
            lines.append(instr.text)

        end_label = self._label_at(instructions, len(data))
        if end_label:
            lines.append(f"{end_label}:")

        return "\n".join(lines) + "\n"

    @staticmethod
    def _label_at(
        instructions: List[DisassembledInstruction], address: int
    ) -> Optional[str]:
        """Find the label any branch uses for `address`."""
        for instr in instructions:
            if (
                isinstance(instr.instruction, Jump)
                and instr.target_label
                and instr.instruction.target(instr.address) == address
            ):
                return instr.target_label
        return None
