"""Test helpers shared across test modules."""

from __future__ import annotations

from monopub.versioning import Version
from monopub.workspace import RawPackage


def raw_package(
    name: str,
    version: str = "1.0.0",
    *,
    deps: list[str] | None = None,
    dev_deps: list[str] | None = None,
    private: bool = False,
    path: str | None = None,
) -> RawPackage:
    """Build a pnpm list record whose listed dependencies are workspace links."""
    return RawPackage.model_validate(
        {
            "name": name,
            "version": version,
            "path": path or f"/ws/packages/{name}",
            "private": private,
            "dependencies": {
                dep: {"from": dep, "version": f"link:../{dep}"} for dep in deps or []
            },
            "devDependencies": {
                dep: {"from": dep, "version": f"link:../{dep}"} for dep in dev_deps or []
            },
        }
    )


class FakeRegistry:
    """In-memory version source."""

    def __init__(self, versions: dict[str, str], errors: dict[str, Exception] | None = None):
        self.versions = versions
        self.errors = errors or {}
        self.calls: list[str] = []

    async def latest(self, name: str) -> Version | None:
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]
        version = self.versions.get(name)
        return Version.parse(version) if version is not None else None
