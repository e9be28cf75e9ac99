"""Ignore-based package filtering."""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monopub.workspace.package import RawPackage


def _candidate_paths(package: RawPackage, root: Path | None) -> list[str]:
    """Package path as written by pnpm, plus relative to ``root`` when inside it."""
    paths = [package.path]
    if root is not None:
        try:
            paths.append(Path(package.path).relative_to(root).as_posix())
        except ValueError:
            pass
    return paths


def should_ignore(package: RawPackage, patterns: list[str], root: Path | None = None) -> bool:
    """Check if a package matches any ignore pattern.

    Args:
        package: Package to check.
        patterns: List of ignore patterns.
        root: Workspace root, so patterns like ``examples/*`` match relative paths.

    Returns:
        True if package should be ignored.
    """
    if not patterns:
        return False

    paths = _candidate_paths(package, root)
    for pattern in patterns:
        # Match by name, including scoped names like @org/pkg
        if fnmatch.fnmatch(package.name, pattern):
            return True

        # Match by path
        if any(fnmatch.fnmatch(path, pattern) for path in paths):
            return True

    return False


def filter_by_ignore(
    packages: list[RawPackage],
    ignore: list[str] | None,
    root: Path | None = None,
) -> list[RawPackage]:
    """Filter out packages matching ignore patterns.

    Args:
        packages: List of packages to filter.
        ignore: List of ignore patterns.
        root: Workspace root for relative path patterns.

    Returns:
        Filtered list of packages (not matching any ignore pattern).
    """
    if not ignore:
        return packages

    return [p for p in packages if not should_ignore(p, ignore, root)]
