"""Update detection and publish planning."""

from monopub.analysis.detect import LookupProgress, VersionSource, detect_updates
from monopub.analysis.planner import (
    PublishEntry,
    PublishPlan,
    effective_severity,
    order_for_publish,
    plan_publish,
)

__all__ = [
    "LookupProgress",
    "PublishEntry",
    "PublishPlan",
    "VersionSource",
    "detect_updates",
    "effective_severity",
    "order_for_publish",
    "plan_publish",
]
