"""
sim8086 Emulator Package
========================

Fetch-decode-execute interpreter for the supported 8086 subset.

Components:
    - I8086: the interpreter (step/run, register and flag access)
    - CPUState / RegisterFile: mutable machine state with masked
      AL/AH/AX-style register aliasing
    - Flags / TraceEntry: status flags and per-instruction trace records

Example usage:
    >>> from sim8086.emulator import I8086
    >>> cpu = I8086(image, on_trace=print)
    >>> _ = cpu.run()
    >>> print(cpu.format_registers())

Copyright (c) 2026 sim8086 Contributors
"""

from .cpu import I8086, CPUState, RegisterFile, TraceSink
from .trace import Flags, TraceEntry, format_flags

__all__ = [
    "I8086",
    "CPUState",
    "RegisterFile",
    "TraceSink",
    "Flags",
    "TraceEntry",
    "format_flags",
]
