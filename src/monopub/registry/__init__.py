"""Package registry clients."""

from monopub.registry.npm import NpmRegistry

__all__ = [
    "NpmRegistry",
]
