"""
sim8086 Configuration
=====================

Run configuration for the command-line tool. Values come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

Environment variables (all optional):
    SIM8086_LOG_LEVEL: Logging level name (default: WARNING)
    SIM8086_LABEL_PREFIX: Prefix for generated branch labels (default: label)
    SIM8086_TRACE: 1 to print the per-instruction trace when simulating,
                   0 to print only the final registers (default: 1)

Copyright (c) 2026 sim8086 Contributors
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class Config:
    """
    Configuration for a disassembly or simulation run.

    Attributes:
        log_level: Logging level name for the root logger
        label_prefix: Branch labels are <prefix>0, <prefix>1, ...
        trace: Emit one trace line per executed instruction
    """
    log_level: str = "WARNING"
    label_prefix: str = "label"
    trace: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create a Config from environment variables.

        Invalid values are ignored with a warning and the default kept.
        """
        config = cls()

        if level := os.environ.get("SIM8086_LOG_LEVEL"):
            level = level.upper()
            if isinstance(logging.getLevelName(level), int):
                config.log_level = level
            else:
                logger.warning(f"Ignoring invalid SIM8086_LOG_LEVEL: {level}")

        if prefix := os.environ.get("SIM8086_LABEL_PREFIX"):
            if prefix.isidentifier():
                config.label_prefix = prefix
            else:
                logger.warning(f"Ignoring invalid SIM8086_LABEL_PREFIX: {prefix}")

        if trace := os.environ.get("SIM8086_TRACE"):
            value = trace.strip().lower()
            if value in _TRUE_VALUES:
                config.trace = True
            elif value in _FALSE_VALUES:
                config.trace = False
            else:
                logger.warning(f"Ignoring invalid SIM8086_TRACE: {trace}")

        return config


def get_default_config() -> Config:
    """Return configuration from the environment."""
    return Config.from_env()
