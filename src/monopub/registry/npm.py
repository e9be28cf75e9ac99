"""npm registry lookups."""

from __future__ import annotations

import json
import shlex
from pathlib import Path
from typing import Any

from monopub.errors import RegistryError
from monopub.execution import run_command
from monopub.versioning import Version

NOT_FOUND_CODE = "E404"


def _safe_parse_json(raw: str) -> Any:
    """Parse JSON, returning None if it is not valid."""
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _error_code(*outputs: str) -> str | None:
    """Extract ``error.code`` from the JSON error body npm prints with --json."""
    for output in outputs:
        data = _safe_parse_json(output)
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            return data["error"].get("code")
    return None


class NpmRegistry:
    """Latest-version lookups through ``npm view``.

    Attributes:
        cwd: Directory npm runs in, so workspace .npmrc settings apply.
        url: Optional registry URL overriding npm's configuration.
    """

    def __init__(self, cwd: Path, url: str | None = None) -> None:
        self.cwd = cwd
        self.url = url

    def view_command(self, name: str) -> str:
        """Build the ``npm view`` command for a package."""
        command = f"npm view {shlex.quote(name)} --json"
        if self.url:
            command += f" --registry {shlex.quote(self.url)}"
        return command

    async def latest(self, name: str) -> Version | None:
        """Get the latest published version of a package.

        Args:
            name: Package name.

        Returns:
            Latest version, or None if the package was never published.

        Raises:
            RegistryError: If the lookup fails for any other reason.
        """
        command = self.view_command(name)
        exit_code, stdout, stderr, _ = await run_command(command, self.cwd)

        if exit_code != 0:
            if _error_code(stdout, stderr) == NOT_FOUND_CODE:
                return None
            raise RegistryError(
                f"Failed to look up {name} [{exit_code}]: {stderr.strip() or stdout.strip()}",
                command=command,
                exit_code=exit_code,
                stderr=stderr,
            )

        info = _safe_parse_json(stdout)
        # Several matching versions come back as a list, newest last
        if isinstance(info, list) and info:
            info = info[-1]
        if not isinstance(info, dict) or not isinstance(info.get("version"), str):
            raise RegistryError(
                f"Unexpected npm view output for {name}: {stdout.strip()}",
                command=command,
                exit_code=exit_code,
            )

        return Version.parse(info["version"])
