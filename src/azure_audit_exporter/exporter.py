"""Exporter bootstrap and main loop."""

import asyncio
import logging
from typing import Optional

from .auth.azure import AzureCredentialProvider
from .context import AppContext
from .metrics.exposition import MetricsServer
from .metrics.registry import SnapshotRegistry
from .models.config import ExporterConfig
from .providers.azure import AzureResourceClient
from .services.accounts import discover_accounts
from .services.collection_cycle import CollectionCycle
from .services.scheduler import ScrapeScheduler

logger = logging.getLogger(__name__)


def bootstrap(
    config: ExporterConfig,
    credential_provider: Optional[AzureCredentialProvider] = None
) -> AppContext:
    """Authenticate and resolve the accounts under audit.

    Raises:
        AuthenticationError: if the Azure credential cannot be verified
        AccountDiscoveryError: if the subscriptions cannot be enumerated
    """
    logger.info("Init Azure connection")
    credential_provider = credential_provider or AzureCredentialProvider.from_environment()
    credential = credential_provider.get_credential()
    accounts = discover_accounts(credential, config.subscription_ids)

    return AppContext(
        config=config,
        client=AzureResourceClient(credential),
        accounts=accounts,
        registry=SnapshotRegistry(),
    )


async def serve(context: AppContext, stop_event: Optional[asyncio.Event] = None) -> None:
    """Run the scheduler and the metrics server until ``stop_event`` is set."""
    config = context.config
    stop_event = stop_event or asyncio.Event()

    scheduler = ScrapeScheduler(
        CollectionCycle(context),
        interval=config.scrape_interval,
        allow_overlap=config.allow_overlap
    )
    server = MetricsServer(
        context.registry,
        host=config.host,
        port=config.port,
        path=config.metrics_path
    )

    logger.info("Starting metrics collection")
    logger.info(f"  scrape time: {config.scrape_interval}s")
    scheduler.start()

    try:
        logger.info(f"Starting http server on {config.bind}")
        await server.start()
        await stop_event.wait()
    finally:
        await scheduler.stop()
        await server.stop()
        context.close()
