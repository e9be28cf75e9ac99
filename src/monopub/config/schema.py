"""Configuration schema for monopub.yaml."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegistryConfig(BaseModel):
    """Registry lookup settings."""

    model_config = ConfigDict(extra="forbid")

    url: str | None = Field(default=None, description="Registry passed to npm view --registry")
    concurrency: int = Field(default=8, ge=1, le=64, description="Concurrent version lookups")


class PublishConfig(BaseModel):
    """Publish settings."""

    model_config = ConfigDict(extra="forbid")

    command: str = Field(
        default="pnpm publish --no-git-checks",
        description="Command run in each package directory to publish it",
    )
    timeout: float | None = Field(default=None, gt=0, description="Seconds per publish")


class MonopubConfig(BaseModel):
    """Root configuration model.

    Every field has a default, so a workspace without monopub.yaml works as is.
    """

    model_config = ConfigDict(extra="forbid")

    link_prefix: str = Field(default="link:", min_length=1)
    ignore: list[str] = Field(default_factory=list)
    install: bool = Field(default=True, description="Run pnpm install before listing")
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    publish: PublishConfig = Field(default_factory=PublishConfig)
