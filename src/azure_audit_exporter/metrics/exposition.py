"""Prometheus text exposition of the live snapshot over HTTP."""

import logging
from typing import Optional

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily

from ..constants import DEFAULT_METRICS_PATH
from .registry import SnapshotRegistry

logger = logging.getLogger(__name__)


class SnapshotCollector:
    """prometheus_client collector reading the live snapshot.

    Each scrape exports the snapshot once, so all families of one response
    come from the same installed snapshot.
    """

    def __init__(self, registry: SnapshotRegistry) -> None:
        self.registry = registry

    def collect(self):
        for series in self.registry.export():
            family = GaugeMetricFamily(
                series.name,
                series.definition.help,
                labels=list(series.definition.labelnames)
            )
            for labels, value in series.items():
                family.add_metric(list(labels), value)
            yield family


def build_collector_registry(registry: SnapshotRegistry) -> CollectorRegistry:
    """Create a prometheus_client registry exposing only the snapshot."""
    collector_registry = CollectorRegistry(auto_describe=False)
    collector_registry.register(SnapshotCollector(registry))
    return collector_registry


def render_snapshot(registry: SnapshotRegistry) -> bytes:
    """Render the live snapshot in the Prometheus text format."""
    return generate_latest(build_collector_registry(registry))


class MetricsServer:
    """aiohttp server answering scrapes with the live snapshot."""

    def __init__(
        self,
        registry: SnapshotRegistry,
        host: Optional[str] = None,
        port: int = 8080,
        path: str = DEFAULT_METRICS_PATH
    ) -> None:
        """Initialize metrics server.

        Args:
            registry: Snapshot registry to expose
            host: Interface to bind, None for all interfaces
            port: TCP port to bind
            path: HTTP path serving the exposition
        """
        self.registry = registry
        self.host = host
        self.port = port
        self.path = path
        self._collector_registry = build_collector_registry(registry)
        self._runner: Optional[web.AppRunner] = None

    async def handle_metrics(self, request: web.Request) -> web.Response:
        """Serve the live snapshot."""
        body = generate_latest(self._collector_registry)
        return web.Response(body=body, headers={"Content-Type": CONTENT_TYPE_LATEST})

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get(self.path, self.handle_metrics)
        return app

    async def start(self) -> None:
        """Start serving on the configured address."""
        runner = web.AppRunner(self.build_app())
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()

        # Store runner for cleanup
        self._runner = runner
        logger.info(f"Serving metrics on {self.host or '*'}:{self.port}{self.path}")

    async def stop(self) -> None:
        """Stop the server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
