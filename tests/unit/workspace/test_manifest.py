"""Tests for package.json writing."""

from __future__ import annotations

import json
from pathlib import Path

from monopub.versioning import Version
from monopub.workspace.manifest import read_manifest, write_package_version


def test_write_version_preserves_fields(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "lib", "version": "1.0.0", "main": "index.js"})
    )

    path = write_package_version(tmp_path, Version.parse("1.0.1"))

    text = path.read_text()
    assert text.endswith("}\n")
    assert '  "version": "1.0.1"' in text
    assert list(json.loads(text)) == ["name", "version", "main"]


def test_write_version_accepts_string(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"name": "lib", "version": "1.0.0"}')
    write_package_version(tmp_path, "2.0.0")
    assert read_manifest(tmp_path)["version"] == "2.0.0"


def test_write_version_adds_missing_field(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"name": "lib"}')
    write_package_version(tmp_path, "0.0.1")
    assert read_manifest(tmp_path) == {"name": "lib", "version": "0.0.1"}
