"""pnpm workspace discovery and loading."""

from __future__ import annotations

from pathlib import Path

from monopub.config import MonopubConfig, load_config
from monopub.errors import WorkspaceNotFoundError
from monopub.workspace import pnpm
from monopub.workspace.graph import PackageGraph, build_graph
from monopub.workspace.package import RawPackage


def find_workspace_root(start: Path | None = None) -> Path:
    """Find the nearest directory containing pnpm-workspace.yaml.

    Args:
        start: Directory to start from (defaults to the current directory).

    Returns:
        Workspace root.

    Raises:
        WorkspaceNotFoundError: If no parent directory is a workspace root.
    """
    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        if (directory / pnpm.WORKSPACE_FILENAME).is_file():
            return directory
    raise WorkspaceNotFoundError(start)


class Workspace:
    """A pnpm workspace with its monopub configuration.

    Attributes:
        root: Workspace root directory.
        config: Loaded configuration.
    """

    def __init__(self, root: Path, config: MonopubConfig | None = None) -> None:
        self.root = root
        self.config = config if config is not None else load_config(root)
        self._graph: PackageGraph | None = None

    @classmethod
    def discover(cls, path: Path | None = None) -> Workspace:
        """Load the workspace containing ``path``."""
        return cls(find_workspace_root(path))

    async def load_packages(self) -> list[RawPackage]:
        """List workspace members, installing first if configured."""
        if self.config.install:
            await pnpm.install(self.root)
        return await pnpm.list_packages(self.root)

    async def load_graph(self) -> PackageGraph:
        """Load workspace members and build the dependency graph."""
        raw_packages = await self.load_packages()
        self._graph = build_graph(
            raw_packages,
            link_prefix=self.config.link_prefix,
            ignore=self.config.ignore,
            root=self.root,
        )
        return self._graph

    @property
    def graph(self) -> PackageGraph:
        """Graph from the last ``load_graph`` call."""
        if self._graph is None:
            raise RuntimeError("Workspace graph not loaded; await load_graph() first")
        return self._graph

    def relative_path(self, path: Path) -> str:
        """Path relative to the workspace root when possible."""
        try:
            return str(path.relative_to(self.root))
        except ValueError:
            return str(path)
