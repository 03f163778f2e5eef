"""
sim8086 Command-Line Interface
==============================

- **sim8086**: disassemble (-d) or simulate (-s) a raw 8086 program image

Implemented as a Click application with shared error reporting
(see errors.py).
"""

__all__ = ["sim8086"]
