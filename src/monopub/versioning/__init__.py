"""Version parsing, comparison and bumping."""

from monopub.versioning.semver import Severity, Version, VersionDiff

__all__ = [
    "Severity",
    "Version",
    "VersionDiff",
]
