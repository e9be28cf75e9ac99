"""monopub command-line interface."""

from monopub.cli.app import app, main

__all__ = ["app", "main"]
