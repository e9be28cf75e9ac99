"""Exception hierarchy for monopub."""

from __future__ import annotations

from pathlib import Path


class MonopubError(Exception):
    """Base class for all monopub errors.

    Attributes:
        message: Human readable description of the failure.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(MonopubError):
    """Invalid or unreadable monopub.yaml."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)
        self.path = path


class WorkspaceNotFoundError(MonopubError):
    """No pnpm-workspace.yaml was found above the start directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Not inside a pnpm workspace: {path}")
        self.path = path


class PackageNotFoundError(MonopubError):
    """A package name is not part of the workspace graph."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package not found: {name}")
        self.name = name


class CyclicDependencyError(MonopubError):
    """Workspace packages depend on each other in a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(f"Cyclic dependency detected: {' -> '.join(cycle)}")
        self.cycle = cycle


class VersionError(MonopubError):
    """A version cannot be bumped."""

    def __init__(self, message: str, version: str | None = None) -> None:
        super().__init__(message)
        self.version = version


class ExecutionError(MonopubError):
    """An external command failed."""

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr


class RegistryError(ExecutionError):
    """Looking up a package in the registry failed."""


class PublishError(ExecutionError):
    """Publishing a package failed."""
