"""Version numbers and bump arithmetic."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from monopub.errors import VersionError

# Matches: major.minor.patch with an optional free-form label
# Examples:
#   1.2.3
#   1.0.0-beta.1
VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-(.+))?$")

NON_STANDARD = -1


class Severity(IntEnum):
    """Magnitude of a version change, weakest first."""

    EXTRA = 1
    PATCH = 2
    MINOR = 3
    MAJOR = 4


@dataclass(frozen=True, slots=True)
class VersionDiff:
    """Outcome of comparing two versions.

    Attributes:
        side: 1 if the left version is newer, -1 if older, 0 if equal.
        severity: Weight of the first differing component. Meaningless when side is 0.
    """

    side: int
    severity: Severity


@dataclass(frozen=True, slots=True)
class Version:
    """A ``major.minor.patch[-label]`` version.

    Strings that do not follow that grammar are kept verbatim in ``label``
    with all numeric components set to ``-1``.
    """

    major: int
    minor: int
    patch: int
    label: str = ""

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string. Never fails.

        Args:
            text: Version string.

        Returns:
            Parsed version, or the non-standard form if the text does not match.
        """
        match = VERSION_PATTERN.match(text)
        if not match:
            return cls(NON_STANDARD, NON_STANDARD, NON_STANDARD, text)

        major, minor, patch, label = match.groups()
        return cls(int(major), int(minor), int(patch), label or "")

    @property
    def is_standard(self) -> bool:
        """Whether the version follows the numeric grammar."""
        return self.major >= 0

    def __str__(self) -> str:
        if not self.is_standard:
            return self.label
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.label}" if self.label else base

    def compare(self, other: Version | str) -> VersionDiff:
        """Compare this version against another one.

        Non-standard versions only compare by text: any difference counts
        as a major change of this version.

        Args:
            other: Version or version string to compare against.

        Returns:
            Which side is newer and at which severity.
        """
        if isinstance(other, str):
            other = Version.parse(other)

        if not self.is_standard or not other.is_standard:
            side = 1 if str(self) != str(other) else 0
            return VersionDiff(side, Severity.MAJOR)

        for mine, theirs, severity in (
            (self.major, other.major, Severity.MAJOR),
            (self.minor, other.minor, Severity.MINOR),
            (self.patch, other.patch, Severity.PATCH),
        ):
            if mine > theirs:
                return VersionDiff(1, severity)
            if mine < theirs:
                return VersionDiff(-1, severity)

        # Labels are not ordered, any difference is an update
        if self.label != other.label:
            return VersionDiff(1, Severity.EXTRA)

        return VersionDiff(0, Severity.MAJOR)

    def bump(self, severity: Severity) -> Version:
        """Return a new version bumped at the given severity.

        Args:
            severity: MAJOR, MINOR or PATCH.

        Returns:
            Bumped version without label.

        Raises:
            VersionError: If the version is non-standard or severity is EXTRA.
        """
        if not self.is_standard:
            raise VersionError(f"Cannot bump non-standard version '{self}'", version=str(self))

        if severity == Severity.MAJOR:
            return Version(self.major + 1, 0, 0)
        if severity == Severity.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if severity == Severity.PATCH:
            return Version(self.major, self.minor, self.patch + 1)

        raise VersionError(
            f"Cannot bump '{self}' at {severity.name.lower()} level", version=str(self)
        )
