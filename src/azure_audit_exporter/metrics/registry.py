"""Snapshot registry holding the exposed metric series.

The live snapshot is immutable once installed. Writers either assemble a
private snapshot and install it in one step, or use the registry level
``reset``/``set``/``add`` which replace a single series copy-on-write. In
both cases a reader holding the live snapshot never observes a series in
the middle of an update.
"""

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..constants import (
    METRIC_ADVISOR_RECOMMENDATION,
    METRIC_RESOURCEGROUP_INFO,
    METRIC_SECURITYCENTER_COMPLIANCE,
    METRIC_SUBSCRIPTION_INFO,
)
from ..models.base import Category, Record

LabelTuple = Tuple[str, ...]


@dataclass(frozen=True)
class SeriesDefinition:
    """Name, help text and label names of a metric series."""
    name: str
    help: str
    labelnames: Tuple[str, ...]


SERIES_DEFINITIONS: Dict[Category, SeriesDefinition] = {
    Category.SUBSCRIPTION: SeriesDefinition(
        name=METRIC_SUBSCRIPTION_INFO,
        help="Azure Audit Subscription info",
        labelnames=("subscriptionID", "subscriptionName", "spendingLimit", "quotaID", "locationPlacementID"),
    ),
    Category.RESOURCE_GROUP: SeriesDefinition(
        name=METRIC_RESOURCEGROUP_INFO,
        help="Azure Audit ResourceGroup info",
        labelnames=("subscriptionID", "resourceGroup", "location"),
    ),
    Category.COMPLIANCE: SeriesDefinition(
        name=METRIC_SECURITYCENTER_COMPLIANCE,
        help="Azure Audit SecurityCenter compliance status",
        labelnames=("subscriptionID", "assessmentType"),
    ),
    Category.ADVISOR: SeriesDefinition(
        name=METRIC_ADVISOR_RECOMMENDATION,
        help="Azure Audit Advisor recommendation",
        labelnames=("subscriptionID", "category", "resourceType", "resourceName", "resourceGroup", "impact", "risk"),
    ),
}

# Categories whose entries are summed when the same label tuple repeats
ACCUMULATING_CATEGORIES = frozenset({Category.COMPLIANCE, Category.ADVISOR})


class MetricSeries:
    """A named collection of label tuple to value entries."""

    def __init__(
        self,
        definition: SeriesDefinition,
        values: Optional[Dict[LabelTuple, float]] = None
    ) -> None:
        self.definition = definition
        self._values: Dict[LabelTuple, float] = dict(values or {})
        self._frozen = False

    @property
    def name(self) -> str:
        return self.definition.name

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError(f"series {self.name} belongs to an installed snapshot")

    def _check_labels(self, labels: LabelTuple) -> LabelTuple:
        labels = tuple(labels)
        if len(labels) != len(self.definition.labelnames):
            raise ValueError(
                f"series {self.name} expects {len(self.definition.labelnames)} labels, got {len(labels)}"
            )
        return labels

    def reset(self) -> None:
        """Remove all entries."""
        self._check_writable()
        self._values.clear()

    def set(self, labels: LabelTuple, value: float) -> None:
        """Upsert one entry."""
        self._check_writable()
        self._values[self._check_labels(labels)] = float(value)

    def add(self, labels: LabelTuple, value: float) -> None:
        """Sum ``value`` into the entry for ``labels``."""
        self._check_writable()
        labels = self._check_labels(labels)
        self._values[labels] = self._values.get(labels, 0.0) + float(value)

    def get(self, labels: LabelTuple) -> Optional[float]:
        return self._values.get(tuple(labels))

    def items(self) -> List[Tuple[LabelTuple, float]]:
        return list(self._values.items())

    def copy(self) -> "MetricSeries":
        return MetricSeries(self.definition, self._values)

    def freeze(self) -> None:
        self._frozen = True

    def __len__(self) -> int:
        return len(self._values)


class Snapshot:
    """The full set of metric series at one point in time."""

    def __init__(self, series: Dict[Category, MetricSeries]) -> None:
        self._series = series

    @classmethod
    def empty(cls, definitions: Dict[Category, SeriesDefinition] = SERIES_DEFINITIONS) -> "Snapshot":
        """Create a snapshot with one empty series per category."""
        return cls({category: MetricSeries(definition) for category, definition in definitions.items()})

    @property
    def categories(self) -> List[Category]:
        return list(self._series)

    def series(self, category: Category) -> MetricSeries:
        try:
            return self._series[category]
        except KeyError:
            raise KeyError(f"no metric series registered for category '{category.value}'")

    def reset(self, category: Category) -> None:
        self.series(category).reset()

    def set(self, category: Category, labels: LabelTuple, value: float) -> None:
        self.series(category).set(labels, value)

    def add(self, category: Category, labels: LabelTuple, value: float) -> None:
        self.series(category).add(labels, value)

    def apply(self, record: Record) -> None:
        """Write a record, summing for accumulating categories."""
        if record.category in ACCUMULATING_CATEGORIES:
            self.add(record.category, record.labels, record.value)
        else:
            self.set(record.category, record.labels, record.value)

    def apply_all(self, records: Iterable[Record]) -> int:
        count = 0
        for record in records:
            self.apply(record)
            count += 1
        return count

    def with_series(self, category: Category, series: MetricSeries) -> "Snapshot":
        """Return a new snapshot sharing every series except ``category``."""
        self.series(category)
        replaced = dict(self._series)
        replaced[category] = series
        return Snapshot(replaced)

    def freeze(self) -> None:
        for series in self._series.values():
            series.freeze()

    def __iter__(self):
        return iter(self._series.values())


class SnapshotRegistry:
    """Process-wide holder of the live snapshot."""

    def __init__(self, definitions: Dict[Category, SeriesDefinition] = SERIES_DEFINITIONS) -> None:
        self.definitions = dict(definitions)
        self._lock = threading.Lock()
        self._live = Snapshot.empty(self.definitions)
        self._live.freeze()

    def new_snapshot(self) -> Snapshot:
        """Create a private, empty working snapshot for one assembly pass."""
        return Snapshot.empty(self.definitions)

    def install(self, snapshot: Snapshot) -> None:
        """Publish ``snapshot`` as the live snapshot in a single step."""
        if set(snapshot.categories) != set(self.definitions):
            raise ValueError("snapshot does not cover every registered series")
        snapshot.freeze()
        with self._lock:
            self._live = snapshot

    @property
    def live(self) -> Snapshot:
        with self._lock:
            return self._live

    def _replace_series(self, category: Category, update) -> None:
        with self._lock:
            series = self._live.series(category).copy()
            update(series)
            snapshot = self._live.with_series(category, series)
            snapshot.freeze()
            self._live = snapshot

    def reset(self, category: Category) -> None:
        """Clear every entry of one live series."""
        self._replace_series(category, lambda series: series.reset())

    def set(self, category: Category, labels: LabelTuple, value: float) -> None:
        """Upsert one entry of a live series."""
        self._replace_series(category, lambda series: series.set(labels, value))

    def add(self, category: Category, labels: LabelTuple, value: float) -> None:
        """Sum into one entry of a live series."""
        self._replace_series(category, lambda series: series.add(labels, value))

    def export(self) -> List[MetricSeries]:
        """Return every series of the live snapshot.

        The returned series are frozen and stay consistent even if a new
        snapshot is installed while the caller iterates them.
        """
        return list(self.live)
