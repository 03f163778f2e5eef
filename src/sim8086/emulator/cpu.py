"""
8086 Interpreter
================

Fetch-decode-execute over a raw program image.

State:
    - eight 16-bit registers (AX, CX, DX, BX, SP, BP, SI, DI), with byte
      access to the low/high halves of AX..DX
    - a 16-bit instruction pointer (offset into the image)
    - zero and sign flags

Each step decodes at the instruction pointer, advances the pointer by the
decoded size, then applies the instruction's effect. The CPU halts when
the pointer reaches or passes the end of the image.

Execution Coverage
------------------
    MOV            register/immediate source -> register
    ADD, SUB, CMP  register/immediate source -> register; set Z and S
    JNE            taken when Z is clear

Everything else that decodes (memory operands, the other branch and loop
forms) raises UnsupportedInstructionError. That is a coverage boundary of
the interpreter, not a decode failure.

Example:
    >>> cpu = I8086(bytes([0xB9, 0x0C, 0x00]))   # mov cx, 12
    >>> _ = cpu.run()
    >>> f"{cpu.registers['cx']:04X}"
    '000C'

Copyright (c) 2026 sim8086 Contributors
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, assert_never

from sim8086.cpu import DUMP_ORDER, WORD_MASK, JumpKind, Register
from sim8086.decoder import (
    Add,
    BinaryInstruction,
    ByteCursor,
    Cmp,
    Immediate8,
    Immediate16,
    Instruction,
    Jump,
    Memory,
    Mov,
    Operand,
    Sub,
    decode,
)
from sim8086.emulator.trace import Flags, TraceEntry, format_flags
from sim8086.errors import ExecutionError, Sim8086Error, UnsupportedInstructionError

logger = logging.getLogger(__name__)

# Line-oriented trace destination
TraceSink = Callable[[str], None]


# =============================================================================
# Register File
# =============================================================================

class RegisterFile:
    """
    Eight 16-bit words with masked access by register name.

    Byte registers read and write only their half of the word: writing
    AL leaves AH untouched and vice versa.

    Example:
        >>> regs = RegisterFile()
        >>> regs.set(Register.AX, 0x1234)
        >>> regs.set(Register.AL, 0xFF)
        >>> hex(regs.get(Register.AX))
        '0x12ff'
    """

    def __init__(self) -> None:
        self._words: List[int] = [0] * 8

    def get(self, reg: Register) -> int:
        """Read a register, right-aligned (AH yields 0x00-0xFF)."""
        return (self._words[reg.slot] & reg.mask) >> reg.shift

    def set(self, reg: Register, value: int) -> None:
        """Write a register, masked to its width, preserving the other half."""
        value = (value & reg.width_mask) << reg.shift
        word = self._words[reg.slot]
        self._words[reg.slot] = (word & ~reg.mask & WORD_MASK) | value

    def words(self) -> Tuple[int, ...]:
        """Snapshot of all eight words in slot order."""
        return tuple(self._words)


# =============================================================================
# CPU State
# =============================================================================

@dataclass
class CPUState:
    """
    Complete interpreter state.

    The image is borrowed, not copied.
    """
    image: memoryview
    ip: int = 0
    flags: Flags = Flags(0)
    registers: RegisterFile = field(default_factory=RegisterFile)


# =============================================================================
# Interpreter
# =============================================================================

class I8086:
    """
    8086 subset interpreter.

    Attributes:
        state: The CPUState being mutated
        on_trace: Optional line sink; receives one line per executed
                  instruction. The interpreter never prints.
    """

    def __init__(self, image: bytes, on_trace: Optional[TraceSink] = None):
        """
        Args:
            image: Raw program bytes; execution starts at offset 0
            on_trace: Optional callable receiving trace lines
        """
        self.state = CPUState(memoryview(image))
        self.on_trace = on_trace

    # ========================================
    # Register and Flag Properties
    # ========================================

    @property
    def ip(self) -> int:
        """Instruction pointer (16-bit)."""
        return self.state.ip

    @ip.setter
    def ip(self, value: int) -> None:
        self.state.ip = value & WORD_MASK

    @property
    def flag_z(self) -> bool:
        """Zero flag."""
        return bool(self.state.flags & Flags.Z)

    @flag_z.setter
    def flag_z(self, value: bool) -> None:
        if value:
            self.state.flags |= Flags.Z
        else:
            self.state.flags &= ~Flags.Z

    @property
    def flag_s(self) -> bool:
        """Sign flag."""
        return bool(self.state.flags & Flags.S)

    @flag_s.setter
    def flag_s(self, value: bool) -> None:
        if value:
            self.state.flags |= Flags.S
        else:
            self.state.flags &= ~Flags.S

    def get_register(self, reg: Register) -> int:
        return self.state.registers.get(reg)

    def set_register(self, reg: Register, value: int) -> None:
        self.state.registers.set(reg, value)

    @property
    def halted(self) -> bool:
        """True once the instruction pointer reaches the end of the image."""
        return self.state.ip >= len(self.state.image)

    @property
    def registers(self) -> Dict[str, int]:
        """
        Current register values as a dictionary.

        Returns:
            Keys ax, bx, cx, dx, sp, bp, si, di, ip and flags
        """
        result = {str(reg): self.get_register(reg) for reg in DUMP_ORDER}
        result["ip"] = self.ip
        result["flags"] = int(self.state.flags)
        return result

    def format_registers(self) -> str:
        """Final register dump, 4-digit uppercase hex in AX..DI order."""
        lines = ["Registers:"]
        for reg in DUMP_ORDER:
            lines.append(f"{reg.name}: {self.get_register(reg):04X}")
        lines.append(f"IP: {self.ip:04X}")
        lines.append(f"FLAGS: {format_flags(self.state.flags)}")
        return "\n".join(lines)

    # ========================================
    # Main Execution Loop
    # ========================================

    def step(self) -> TraceEntry:
        """
        Execute exactly one instruction.

        Returns:
            TraceEntry describing the instruction and its effect

        Raises:
            DecodeError: The bytes at the instruction pointer do not decode
            UnsupportedInstructionError: The instruction has no execution
                semantics here; state is left as before the instruction
            ExecutionError: The CPU is already halted
        """
        if self.halted:
            raise ExecutionError(f"CPU halted at 0x{self.ip:04X}")

        address = self.ip
        instruction = decode(ByteCursor(self.state.image, address))
        self._check_supported(instruction, address)

        registers_before = self.state.registers.words()
        flags_before = self.state.flags

        self.ip = address + instruction.size
        self._execute(instruction)

        entry = TraceEntry(
            address=address,
            instruction=instruction,
            ip_after=self.ip,
            registers_before=registers_before,
            registers_after=self.state.registers.words(),
            flags_before=flags_before,
            flags_after=self.state.flags,
        )
        logger.debug(f"0x{address:04X}: {entry}")
        if self.on_trace:
            self.on_trace(str(entry))
        return entry

    def run(self) -> List[TraceEntry]:
        """
        Execute until halted.

        Returns:
            Trace entries for every executed instruction

        Raises:
            DecodeError, UnsupportedInstructionError: as for step()
        """
        entries = []
        while not self.halted:
            try:
                entries.append(self.step())
            except Sim8086Error as e:
                logger.warning(
                    f"Execution stopped at 0x{self.ip:04X} after "
                    f"{len(entries)} instructions: {e}"
                )
                raise
        logger.debug(f"Halted at 0x{self.ip:04X} after {len(entries)} instructions")
        return entries

    # ========================================
    # Instruction Execution
    # ========================================

    def _check_supported(self, instruction: Instruction, address: int) -> None:
        """Reject instructions the interpreter cannot execute, before any effect."""
        match instruction:
            case BinaryInstruction(dst=dst, src=src):
                if not isinstance(dst, Register):
                    raise UnsupportedInstructionError(
                        instruction, address, "destination must be a register"
                    )
                if isinstance(src, Memory):
                    raise UnsupportedInstructionError(
                        instruction, address, "memory operands are not executed"
                    )
            case Jump(kind=JumpKind.JNE):
                pass
            case Jump():
                raise UnsupportedInstructionError(
                    instruction, address, "only jne is executed"
                )
            case _:
                assert_never(instruction)

    def _execute(self, instruction: Instruction) -> None:
        match instruction:
            case Mov(dst=Register() as dst, src=src):
                self.set_register(dst, self._read_operand(src))
            case Add(dst=Register() as dst, src=src):
                value = self._read_operand(src)
                self.set_register(dst, self._add(dst, self.get_register(dst), value))
            case Sub(dst=Register() as dst, src=src):
                value = self._read_operand(src)
                self.set_register(dst, self._sub(dst, self.get_register(dst), value))
            case Cmp(dst=Register() as dst, src=src):
                value = self._read_operand(src)
                self._sub(dst, self.get_register(dst), value)
            case Jump(kind=JumpKind.JNE, displacement=displacement):
                if not self.flag_z:
                    self.ip = self.ip + displacement
            case _:
                # _check_supported() has already rejected everything else
                raise UnsupportedInstructionError(instruction, self.ip)

    def _read_operand(self, operand: Operand) -> int:
        match operand:
            case Register():
                return self.get_register(operand)
            case Immediate8(value=value) | Immediate16(value=value):
                return value
            case Memory():
                raise ExecutionError(f"memory operand {operand} is not supported")
            case _:
                assert_never(operand)

    # ========================================
    # ALU Operations
    # ========================================

    def _add(self, dst: Register, a: int, b: int) -> int:
        """Add in the destination's width, set Z and S from the masked result."""
        mask = dst.width_mask
        result = ((a & mask) + (b & mask)) & mask
        self.flag_z = result == 0
        self.flag_s = (result & dst.sign_bit) != 0
        return result

    def _sub(self, dst: Register, a: int, b: int) -> int:
        """Subtract as addition of the two's complement of the source."""
        return self._add(dst, a, (-b) & dst.width_mask)
