"""Command execution engine with standard asynchronous capture."""

from __future__ import annotations

import asyncio
import os
import time
from collections.abc import Callable
from pathlib import Path

from monopub.errors import ExecutionError


async def _read_stream(
    stream: asyncio.StreamReader,
    callback: Callable[[str], None] | None,
    buffer: list[str],
) -> None:
    """Read from stream line by line."""
    while True:
        line = await stream.readline()
        if not line:
            break
        decoded = line.decode("utf-8", errors="replace")
        buffer.append(decoded)
        if callback:
            callback(decoded.rstrip())


async def run_command(
    command: str,
    cwd: Path,
    *,
    env: dict[str, str] | None = None,
    timeout: float | None = None,
    on_stdout: Callable[[str], None] | None = None,
    on_stderr: Callable[[str], None] | None = None,
) -> tuple[int, str, str, int]:
    """Run a shell command asynchronously.

    Args:
        command: Shell command to execute.
        cwd: Working directory.
        env: Environment variables (merged with current env).
        timeout: Timeout in seconds.
        on_stdout: Callback for stdout lines.
        on_stderr: Callback for stderr lines.

    Returns:
        Tuple of (exit_code, stdout, stderr, duration_ms).
    """
    run_env = os.environ.copy()
    if env:
        run_env.update(env)

    start_time = time.monotonic()

    try:
        process = await asyncio.create_subprocess_shell(
            command,
            cwd=str(cwd),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=run_env,
        )

        if process.stdout is None or process.stderr is None:
            raise RuntimeError("Process stdout/stderr is None")

        stdout_buffer: list[str] = []
        stderr_buffer: list[str] = []

        try:
            await asyncio.wait_for(
                asyncio.gather(
                    _read_stream(process.stdout, on_stdout, stdout_buffer),
                    _read_stream(process.stderr, on_stderr, stderr_buffer),
                    process.wait(),
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, TimeoutError):
            process.kill()
            await process.wait()
            duration_ms = int((time.monotonic() - start_time) * 1000)
            return -1, "", f"Command timed out after {timeout}s", duration_ms

        duration_ms = int((time.monotonic() - start_time) * 1000)

        return process.returncode or 0, "".join(stdout_buffer), "".join(stderr_buffer), duration_ms

    except asyncio.CancelledError:
        raise
    except Exception as e:
        duration_ms = int((time.monotonic() - start_time) * 1000)
        return -1, "", str(e), duration_ms


async def run_command_checked(
    command: str,
    cwd: Path,
    *,
    error_type: type[ExecutionError] = ExecutionError,
    timeout: float | None = None,
    on_stdout: Callable[[str], None] | None = None,
    on_stderr: Callable[[str], None] | None = None,
) -> str:
    """Run a shell command and return its stdout.

    Args:
        command: Shell command to execute.
        cwd: Working directory.
        error_type: Exception raised on failure.
        timeout: Timeout in seconds.
        on_stdout: Callback for stdout lines as they arrive.
        on_stderr: Callback for stderr lines as they arrive.

    Returns:
        Captured stdout.

    Raises:
        ExecutionError: If the command exits non-zero (as ``error_type``).
    """
    exit_code, stdout, stderr, _ = await run_command(
        command, cwd, timeout=timeout, on_stdout=on_stdout, on_stderr=on_stderr
    )
    if exit_code != 0:
        raise error_type(
            f"{command} failed [{exit_code}]: {stderr.strip() or stdout.strip()}",
            command=command,
            exit_code=exit_code,
            stderr=stderr,
        )
    return stdout
