"""Snapshot registry and Prometheus exposition."""

from .exposition import MetricsServer, SnapshotCollector, render_snapshot
from .registry import (
    ACCUMULATING_CATEGORIES,
    SERIES_DEFINITIONS,
    MetricSeries,
    SeriesDefinition,
    Snapshot,
    SnapshotRegistry,
)

__all__ = [
    "ACCUMULATING_CATEGORIES",
    "SERIES_DEFINITIONS",
    "MetricSeries",
    "MetricsServer",
    "SeriesDefinition",
    "Snapshot",
    "SnapshotCollector",
    "SnapshotRegistry",
    "render_snapshot",
]
