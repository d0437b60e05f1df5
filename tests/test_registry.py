"""Tests for the snapshot registry."""

import pytest

from azure_audit_exporter.metrics.registry import (
    SERIES_DEFINITIONS,
    MetricSeries,
    Snapshot,
    SnapshotRegistry,
)
from azure_audit_exporter.models import Category, Record


@pytest.fixture
def registry():
    return SnapshotRegistry()


def _values(registry, category):
    for series in registry.export():
        if series.definition == SERIES_DEFINITIONS[category]:
            return dict(series.items())
    raise AssertionError(f"series for {category} not exported")


class TestMetricSeries:
    """Test a single metric series."""

    def test_set_overwrites(self):
        series = MetricSeries(SERIES_DEFINITIONS[Category.RESOURCE_GROUP])
        series.set(("sub", "rg", "westeurope"), 1)
        series.set(("sub", "rg", "westeurope"), 1)

        assert len(series) == 1
        assert series.get(("sub", "rg", "westeurope")) == 1.0

    def test_add_sums(self):
        series = MetricSeries(SERIES_DEFINITIONS[Category.COMPLIANCE])
        series.add(("sub", "Compliant"), 30.0)
        series.add(("sub", "Compliant"), 70.0)

        assert series.items() == [(("sub", "Compliant"), 100.0)]

    def test_reset_clears(self):
        series = MetricSeries(SERIES_DEFINITIONS[Category.COMPLIANCE])
        series.set(("sub", ""), 5)
        series.reset()

        assert len(series) == 0

    def test_label_count_is_checked(self):
        series = MetricSeries(SERIES_DEFINITIONS[Category.COMPLIANCE])

        with pytest.raises(ValueError, match="expects 2 labels"):
            series.set(("sub",), 1)

    def test_frozen_series_rejects_writes(self):
        series = MetricSeries(SERIES_DEFINITIONS[Category.COMPLIANCE])
        series.freeze()

        with pytest.raises(RuntimeError):
            series.add(("sub", ""), 1)


class TestSnapshot:
    """Test snapshot assembly."""

    def test_empty_snapshot_has_every_category(self):
        snapshot = Snapshot.empty()

        assert set(snapshot.categories) == set(Category)
        assert all(len(series) == 0 for series in snapshot)

    def test_apply_accumulates_only_accumulating_categories(self):
        snapshot = Snapshot.empty()
        records = [
            Record(Category.RESOURCE_GROUP, ("sub", "rg", "westeurope")),
            Record(Category.RESOURCE_GROUP, ("sub", "rg", "westeurope")),
            Record(Category.ADVISOR, ("sub", "Cost", "t", "n", "rg", "High", "")),
            Record(Category.ADVISOR, ("sub", "Cost", "t", "n", "rg", "High", "")),
        ]

        assert snapshot.apply_all(records) == 4
        assert snapshot.series(Category.RESOURCE_GROUP).get(("sub", "rg", "westeurope")) == 1.0
        assert snapshot.series(Category.ADVISOR).get(("sub", "Cost", "t", "n", "rg", "High", "")) == 2.0


class TestSnapshotRegistry:
    """Test atomic replacement and exports."""

    def test_initial_export_is_empty(self, registry):
        exported = registry.export()

        assert len(exported) == len(SERIES_DEFINITIONS)
        assert all(len(series) == 0 for series in exported)

    def test_install_replaces_whole_snapshot(self, registry):
        first = registry.new_snapshot()
        first.set(Category.RESOURCE_GROUP, ("sub", "old", "westeurope"), 1)
        registry.install(first)

        second = registry.new_snapshot()
        second.set(Category.RESOURCE_GROUP, ("sub", "new", "westeurope"), 1)
        registry.install(second)

        assert _values(registry, Category.RESOURCE_GROUP) == {("sub", "new", "westeurope"): 1.0}

    def test_installed_snapshot_is_frozen(self, registry):
        snapshot = registry.new_snapshot()
        registry.install(snapshot)

        with pytest.raises(RuntimeError):
            snapshot.set(Category.COMPLIANCE, ("sub", ""), 1)

    def test_install_requires_every_series(self, registry):
        partial = Snapshot({Category.COMPLIANCE: MetricSeries(SERIES_DEFINITIONS[Category.COMPLIANCE])})

        with pytest.raises(ValueError):
            registry.install(partial)

    def test_export_taken_before_write_is_unaffected(self, registry):
        registry.set(Category.COMPLIANCE, ("sub", "a"), 10)
        exported = registry.export()

        registry.reset(Category.COMPLIANCE)
        registry.add(Category.COMPLIANCE, ("sub", "b"), 1)
        registry.add(Category.COMPLIANCE, ("sub", "b"), 2)

        old = [s for s in exported if s.definition == SERIES_DEFINITIONS[Category.COMPLIANCE]][0]
        assert dict(old.items()) == {("sub", "a"): 10.0}
        assert _values(registry, Category.COMPLIANCE) == {("sub", "b"): 3.0}

    def test_registry_writes_leave_other_series_untouched(self, registry):
        registry.set(Category.RESOURCE_GROUP, ("sub", "rg", "westeurope"), 1)
        registry.reset(Category.COMPLIANCE)

        assert _values(registry, Category.RESOURCE_GROUP) == {("sub", "rg", "westeurope"): 1.0}
