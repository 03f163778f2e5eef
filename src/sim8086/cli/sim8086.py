"""
sim8086 - 8086 Disassembler / Simulator Command-Line Interface
===============================================================

Disassembles or executes a raw (headerless) 8086 program image.

Usage Examples
--------------
Disassemble to a NASM listing:
    $ sim8086 -d listing_0041.bin

Round trip through NASM:
    $ sim8086 -d prog.bin -o prog.asm && nasm prog.asm -o prog2.bin
    $ cmp prog.bin prog2.bin

Simulate and print the trace and final registers:
    $ sim8086 -s listing_0046.bin

Final registers only:
    $ sim8086 -s listing_0046.bin --no-trace

Copyright (c) 2026 sim8086 Contributors
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import click

from sim8086 import __version__
from sim8086.cli.errors import handle_cli_exception
from sim8086.config import Config
from sim8086.disassembler import I8086Disassembler
from sim8086.emulator import I8086

logger = logging.getLogger(__name__)


def setup_logging(config: Config, verbose: bool) -> None:
    """Configure logging to stderr based on verbosity."""
    level = logging.DEBUG if verbose else config.log_level
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def run_disassembly(data: bytes, stream: TextIO, config: Config) -> None:
    """Write the listing for `data`; nothing is written if decoding fails."""
    disasm = I8086Disassembler(label_prefix=config.label_prefix)
    listing = disasm.disassemble_to_text(data)
    stream.write(listing)


def run_simulation(data: bytes, stream: TextIO, config: Config) -> I8086:
    """
    Execute `data`, streaming trace lines as instructions complete.

    Trace lines already written stay written if execution aborts.
    """
    sink = (lambda line: click.echo(line, file=stream)) if config.trace else None
    cpu = I8086(data, on_trace=sink)
    cpu.run()
    if config.trace:
        click.echo("", file=stream)
    click.echo(cpu.format_registers(), file=stream)
    return cpu


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-d", "--disassemble",
    is_flag=True,
    help="Disassemble the input file to a NASM listing",
)
@click.option(
    "-s", "--simulate",
    is_flag=True,
    help="Execute the input file and print the final registers",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--no-trace",
    is_flag=True,
    help="Print only the final registers when simulating "
         "(overrides SIM8086_TRACE)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging to stderr)",
)
@click.version_option(version=__version__, prog_name="sim8086")
def main(
    input_file: Path,
    disassemble: bool,
    simulate: bool,
    output: Optional[Path],
    no_trace: bool,
    verbose: bool,
) -> None:
    """
    Disassemble or simulate an 8086 program image.

    INPUT_FILE is a raw binary, such as the output of `nasm -f bin`.
    Exactly one of --disassemble and --simulate is required.

    Examples:

        # Reassemblable listing
        sim8086 -d program.bin -o program.asm

        # Execute with trace
        sim8086 -s program.bin
    """
    if disassemble == simulate:
        raise click.UsageError("exactly one of --disassemble/-d and --simulate/-s is required")

    config = Config.from_env()
    if no_trace:
        config.trace = False
    setup_logging(config, verbose)

    try:
        data = input_file.read_bytes()
        logger.info(f"Read {len(data)} bytes from {input_file}")

        target = str(output) if output else "-"
        with click.open_file(target, "w", encoding="utf-8") as stream:
            if disassemble:
                run_disassembly(data, stream, config)
            else:
                run_simulation(data, stream, config)

        if output:
            logger.info(f"Output written to: {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
