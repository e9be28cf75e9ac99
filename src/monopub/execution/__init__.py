"""Subprocess execution."""

from monopub.execution.runner import run_command, run_command_checked

__all__ = [
    "run_command",
    "run_command_checked",
]
