"""Package filtering."""

from monopub.filters.ignore import filter_by_ignore, should_ignore

__all__ = [
    "filter_by_ignore",
    "should_ignore",
]
