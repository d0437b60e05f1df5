"""Tests for the Prometheus exposition endpoint."""

import pytest
from aiohttp import test_utils

from azure_audit_exporter.metrics.exposition import MetricsServer, render_snapshot
from azure_audit_exporter.metrics.registry import SnapshotRegistry
from azure_audit_exporter.models import Category


@pytest.fixture
def registry():
    registry = SnapshotRegistry()
    snapshot = registry.new_snapshot()
    snapshot.set(Category.RESOURCE_GROUP, ("sub-a", "rg-1", "westeurope"), 1)
    snapshot.add(Category.COMPLIANCE, ("sub-a", ""), 42.5)
    registry.install(snapshot)
    return registry


class TestRenderSnapshot:
    """Test text rendering of the live snapshot."""

    def test_renders_help_type_and_samples(self, registry):
        text = render_snapshot(registry).decode()

        assert "# HELP azurerm_resourcegroup_info Azure Audit ResourceGroup info" in text
        assert "# TYPE azurerm_resourcegroup_info gauge" in text
        assert 'azurerm_resourcegroup_info{subscriptionID="sub-a",resourceGroup="rg-1",location="westeurope"} 1.0' in text
        assert 'azurerm_securitycenter_compliance{subscriptionID="sub-a",assessmentType=""} 42.5' in text

    def test_empty_series_are_still_declared(self):
        text = render_snapshot(SnapshotRegistry()).decode()

        for name in (
            "azurerm_subscription_info",
            "azurerm_resourcegroup_info",
            "azurerm_securitycenter_compliance",
            "azurerm_advisor_recommendation",
        ):
            assert f"# TYPE {name} gauge" in text
        assert "} " not in text

    def test_reflects_latest_install(self, registry):
        registry.install(registry.new_snapshot())

        assert "rg-1" not in render_snapshot(registry).decode()


class TestMetricsServer:
    """Test the HTTP endpoint."""

    @pytest.mark.asyncio
    async def test_serves_metrics_on_configured_path(self, registry):
        server = MetricsServer(registry, path="/audit")

        async with test_utils.TestClient(test_utils.TestServer(server.build_app())) as client:
            response = await client.get("/audit")
            body = await response.text()

        assert response.status == 200
        assert response.headers["Content-Type"].startswith("text/plain")
        assert "rg-1" in body

    @pytest.mark.asyncio
    async def test_empty_snapshot_answers_ok(self):
        server = MetricsServer(SnapshotRegistry())

        async with test_utils.TestClient(test_utils.TestServer(server.build_app())) as client:
            response = await client.get("/metrics")
            body = await response.text()

        assert response.status == 200
        assert "# HELP azurerm_advisor_recommendation" in body

    @pytest.mark.asyncio
    async def test_unknown_path_is_not_found(self, registry):
        server = MetricsServer(registry)

        async with test_utils.TestClient(test_utils.TestServer(server.build_app())) as client:
            response = await client.get("/other")

        assert response.status == 404

    @pytest.mark.asyncio
    async def test_start_and_stop(self, registry):
        server = MetricsServer(registry, host="127.0.0.1", port=0)

        await server.start()
        assert server._runner is not None
        await server.stop()

        assert server._runner is None
