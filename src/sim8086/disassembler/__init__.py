"""
sim8086 Disassembler Module
===========================

Turns a raw 8086 program image into a NASM listing with branch targets
resolved to labels, so that reassembling the listing reproduces the image.

Usage:
    from sim8086.disassembler import I8086Disassembler

    disasm = I8086Disassembler()
    text = disasm.disassemble_to_text(image)

Copyright (c) 2026 sim8086 Contributors
"""

from .i8086 import I8086Disassembler, DisassembledInstruction, LISTING_HEADER

__all__ = [
    "I8086Disassembler",
    "DisassembledInstruction",
    "LISTING_HEADER",
]
