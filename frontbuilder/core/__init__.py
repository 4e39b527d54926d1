"""
frontbuilder.core - Foundation layer for the frontbuilder CLI.

Exports logging, command execution and timing helpers.
"""

from frontbuilder.core.utils import (
    # Logging
    log,
    Logger,
    # Runtime utilities
    run_cmd,
    format_cmd,
    echo_output,
)
from frontbuilder.core.timing import TimingContext, format_duration, format_phase_timings

__all__ = [
    "log",
    "Logger",
    "run_cmd",
    "format_cmd",
    "echo_output",
    "TimingContext",
    "format_duration",
    "format_phase_timings",
]
