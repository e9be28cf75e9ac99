"""monopub commands."""

from monopub.commands.base import Command, CommandContext
from monopub.commands.list import (
    ListCommand,
    ListFormat,
    ListResult,
    PackageInfo,
    handle_list_command,
    list_packages,
)
from monopub.commands.publish import (
    PublishCommand,
    PublishOptions,
    PublishResult,
    handle_publish_command,
    publish,
)

__all__ = [
    # Base
    "Command",
    "CommandContext",
    # List
    "ListCommand",
    "ListFormat",
    "ListResult",
    "PackageInfo",
    "handle_list_command",
    "list_packages",
    # Publish
    "PublishCommand",
    "PublishOptions",
    "PublishResult",
    "handle_publish_command",
    "publish",
]
