"""Shared test fixtures for monopub tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from helpers import raw_package
from monopub.workspace import PackageGraph, build_graph

# Load .env from project root (doesn't override existing env vars)
load_dotenv(Path(__file__).parent.parent / ".env")


@pytest.fixture
def chain_graph() -> PackageGraph:
    """app -> lib -> core; core is at 1.1.0, the others at 1.0.0."""
    return build_graph(
        [
            raw_package("app", deps=["lib"]),
            raw_package("core", "1.1.0"),
            raw_package("lib", deps=["core"]),
        ]
    )


@pytest.fixture
def diamond_graph() -> PackageGraph:
    """top -> left, right -> base."""
    return build_graph(
        [
            raw_package("top", deps=["left", "right"]),
            raw_package("left", deps=["base"]),
            raw_package("right", deps=["base"]),
            raw_package("base"),
        ]
    )


def write_package_json(directory: Path, data: dict[str, Any]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Create a pnpm workspace with core, lib (-> core) and app (-> lib)."""
    (tmp_path / "pnpm-workspace.yaml").write_text("packages:\n  - packages/*\n")
    write_package_json(tmp_path, {"name": "root", "private": True})

    packages = tmp_path / "packages"
    write_package_json(packages / "core", {"name": "core", "version": "1.1.0"})
    write_package_json(
        packages / "lib",
        {"name": "lib", "version": "1.0.0", "dependencies": {"core": "workspace:*"}},
    )
    write_package_json(
        packages / "app",
        {"name": "app", "version": "1.0.0", "dependencies": {"lib": "workspace:*"}},
    )
    return tmp_path


@pytest.fixture
def pnpm_list_output(workspace_dir: Path) -> str:
    """What ``pnpm list --recursive --json`` prints for ``workspace_dir``."""
    packages = workspace_dir / "packages"
    return json.dumps(
        [
            {"name": "root", "version": "", "path": str(workspace_dir), "private": True},
            {"name": "core", "version": "1.1.0", "path": str(packages / "core"), "private": False},
            {
                "name": "lib",
                "version": "1.0.0",
                "path": str(packages / "lib"),
                "private": False,
                "dependencies": {
                    "core": {"from": "core", "version": "link:../core", "path": "../core"}
                },
            },
            {
                "name": "app",
                "version": "1.0.0",
                "path": str(packages / "app"),
                "private": False,
                "dependencies": {
                    "lib": {"from": "lib", "version": "link:../lib", "path": "../lib"},
                    "left-pad": {"from": "left-pad", "version": "1.3.0"},
                },
            },
        ]
    )
