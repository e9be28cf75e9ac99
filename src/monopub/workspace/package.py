"""Workspace package records."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from monopub.versioning import Version


class RawDependency(BaseModel):
    """A dependency declaration as reported by ``pnpm list --json``.

    ``version`` holds the resolution target: ``link:../core`` for a
    workspace link, a plain version for a registry dependency.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: str
    from_: str | None = Field(default=None, alias="from")
    path: str | None = None
    resolved: str | None = None

    def is_link(self, prefix: str = "link:") -> bool:
        """Check if the dependency resolves to a local workspace link."""
        return self.version.startswith(prefix)


class RawPackage(BaseModel):
    """One workspace member as reported by ``pnpm list --recursive --json``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    version: str = ""
    path: str
    private: bool = False
    dependencies: dict[str, RawDependency] = Field(default_factory=dict)
    dev_dependencies: dict[str, RawDependency] = Field(
        default_factory=dict, alias="devDependencies"
    )

    def declared_dependencies(self) -> dict[str, RawDependency]:
        """Regular and dev declarations merged, dev overriding on name clashes."""
        return {**self.dependencies, **self.dev_dependencies}


@dataclass(frozen=True, slots=True)
class Package:
    """A maintainable workspace package with its position in the graph.

    Attributes:
        name: Package name.
        version: Local version from package.json.
        path: Package directory.
        dependencies: Workspace packages this package links to directly.
        dependents: Workspace packages linking to this package directly.
        all_dependencies: Every package reachable through dependencies.
        all_dependents: Every package reachable through dependents.
    """

    name: str
    version: Version
    path: Path
    dependencies: tuple[str, ...] = ()
    dependents: tuple[str, ...] = ()
    all_dependencies: frozenset[str] = frozenset()
    all_dependents: frozenset[str] = frozenset()
