"""
sim8086 Test Configuration
==========================

pytest configuration and shared fixtures.

It provides:
- the requires_nasm marker (skipped automatically when nasm is not on PATH)
- a helper fixture that assembles NASM source to a raw binary

Copyright (c) 2026 sim8086 Contributors
"""

import shutil
import subprocess
from itertools import count
from pathlib import Path
from typing import Callable

import pytest


def pytest_configure(config):
    """
    Register custom markers.

        requires_nasm: Test reassembles listings with the nasm assembler
    """
    config.addinivalue_line(
        "markers", "requires_nasm: Test requires the nasm assembler on PATH"
    )


def pytest_collection_modifyitems(config, items):
    """Skip tests marked requires_nasm when nasm is not installed."""
    if shutil.which("nasm") is not None:
        return

    skip_marker = pytest.mark.skip(reason="nasm not available")
    for item in items:
        if "requires_nasm" in item.keywords:
            item.add_marker(skip_marker)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def nasm_assemble(tmp_path: Path) -> Callable[[str], bytes]:
    """
    Fixture: assemble NASM source text and return the flat binary.

    Each call writes to a fresh file pair under tmp_path.
    """
    counter = count()

    def assemble(source: str) -> bytes:
        index = next(counter)
        asm_file = tmp_path / f"source{index}.asm"
        bin_file = tmp_path / f"source{index}.bin"
        asm_file.write_text(source)
        subprocess.run(
            ["nasm", "-f", "bin", str(asm_file), "-o", str(bin_file)],
            check=True,
            capture_output=True,
        )
        return bin_file.read_bytes()

    return assemble


@pytest.fixture
def write_image(tmp_path: Path) -> Callable[[bytes], Path]:
    """Fixture: write raw bytes to a .bin file and return its path."""

    def write(data: bytes, name: str = "program.bin") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return write
