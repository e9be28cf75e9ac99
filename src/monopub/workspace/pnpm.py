"""pnpm operations."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from monopub.errors import ExecutionError, PublishError
from monopub.execution import run_command_checked
from monopub.workspace.package import RawPackage

WORKSPACE_FILENAME = "pnpm-workspace.yaml"

_raw_packages = TypeAdapter(list[RawPackage])


def parse_package_list(raw: str) -> list[RawPackage]:
    """Parse the output of ``pnpm list --recursive --json``.

    Raises:
        ExecutionError: If the output is not the expected JSON list.
    """
    try:
        return _raw_packages.validate_python(json.loads(raw))
    except (ValueError, ValidationError) as e:
        raise ExecutionError(f"Unexpected pnpm list output: {e}") from e


async def install(root: Path) -> None:
    """Run ``pnpm install`` so that ``pnpm list`` reflects current manifests."""
    await run_command_checked("pnpm install", root)


async def list_packages(root: Path) -> list[RawPackage]:
    """List every workspace member with its dependencies."""
    stdout = await run_command_checked("pnpm list --recursive --json", root)
    return parse_package_list(stdout)


async def publish_package(
    package_dir: Path,
    command: str = "pnpm publish --no-git-checks",
    *,
    timeout: float | None = None,
    on_output: Callable[[str], None] | None = None,
) -> str:
    """Publish a package from its directory.

    Args:
        package_dir: Package directory.
        command: Publish command.
        timeout: Timeout in seconds.
        on_output: Called with each stdout and stderr line while publishing.

    Returns:
        Output of the publish command.

    Raises:
        PublishError: If the publish command fails.
    """
    return await run_command_checked(
        command,
        package_dir,
        error_type=PublishError,
        timeout=timeout,
        on_stdout=on_output,
        on_stderr=on_output,
    )
