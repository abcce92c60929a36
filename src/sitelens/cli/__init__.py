"""Command-line interface components."""

from .main import cli
from .types import CLIContext, CommandResult, OutputFormat

__all__ = [
    "CommandResult",
    "CLIContext",
    "OutputFormat",
    "cli",
]
