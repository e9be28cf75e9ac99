"""package.json manipulation."""

from __future__ import annotations

import json
from pathlib import Path

from monopub.versioning import Version

MANIFEST_FILENAME = "package.json"


def read_manifest(package_dir: Path) -> dict:
    """Read a package's package.json."""
    return json.loads((package_dir / MANIFEST_FILENAME).read_text(encoding="utf-8"))


def write_package_version(package_dir: Path, version: Version | str) -> Path:
    """Set the version field of a package's package.json.

    Key order is preserved; the file is rewritten with two-space indentation
    and a trailing newline.

    Args:
        package_dir: Package directory.
        version: New version.

    Returns:
        Path of the rewritten manifest.
    """
    path = package_dir / MANIFEST_FILENAME
    manifest = read_manifest(package_dir)
    manifest["version"] = str(version)
    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
