"""Main CLI entry point."""

import asyncio
import logging
import sys
from typing import Tuple

import click
from rich.console import Console

from .constants import (
    AUTHOR,
    DEFAULT_AZURE_LOCATIONS,
    DEFAULT_METRICS_PATH,
    DEFAULT_PARALLEL_WORKERS,
    DEFAULT_SCRAPE_TIME,
    DEFAULT_SERVER_BIND,
    DEFAULT_TASK_TIMEOUT_SECONDS,
    ERROR_STARTUP,
    ERROR_UNEXPECTED,
    EXIT_ERROR,
    EXIT_KEYBOARD_INTERRUPT,
    INFO_OPERATION_CANCELLED,
    INFO_RUN_WITH_VERBOSE,
    VERSION,
)
from .exceptions import ExporterError
from .exporter import bootstrap, serve
from .utils.config import build_config, load_env_file
from .utils.duration import DURATION
from .utils.logging_config import configure_logging

console = Console(stderr=True)
logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=VERSION, prog_name="azure-audit-exporter")
@click.option('--verbose', '-v', count=True, envvar='VERBOSE', help='Verbose mode (repeat for SDK logs)')
@click.option('--bind', envvar='SERVER_BIND', default=DEFAULT_SERVER_BIND, show_default=True,
              help='Server address')
@click.option('--path', 'metrics_path', envvar='SERVER_PATH', default=DEFAULT_METRICS_PATH, show_default=True,
              help='Metrics exposition path')
@click.option('--scrape-time', envvar='SCRAPE_TIME', type=DURATION, default=DEFAULT_SCRAPE_TIME, show_default=True,
              help='Scrape time (e.g. 30s, 5m, 1h30m)')
@click.option('--azure-subscription', envvar='AZURE_SUBSCRIPTION_ID', multiple=True,
              help='Azure subscription ID (can be specified multiple times, default: all)')
@click.option('--azure-location', envvar='AZURE_LOCATION', multiple=True,
              default=DEFAULT_AZURE_LOCATIONS, show_default=True,
              help='Azure locations (can be specified multiple times)')
@click.option('--collect-subscription/--no-collect-subscription', envvar='COLLECT_SUBSCRIPTION', default=False,
              help='Collect subscription metrics')
@click.option('--collect-resourcegroup/--no-collect-resourcegroup', envvar='COLLECT_RESOURCEGROUP', default=False,
              help='Collect resourcegroup metrics')
@click.option('--collect-compliance/--no-collect-compliance', envvar='COLLECT_COMPLIANCE', default=True,
              show_default=True, help='Collect SecurityCenter compliance metrics')
@click.option('--collect-advisor/--no-collect-advisor', envvar='COLLECT_ADVISOR', default=True,
              show_default=True, help='Collect Advisor recommendation metrics')
@click.option('--task-timeout', envvar='TASK_TIMEOUT', type=DURATION, default=DEFAULT_TASK_TIMEOUT_SECONDS,
              show_default=True, help='Timeout of a single fetch task')
@click.option('--no-overlap', envvar='SCRAPE_NO_OVERLAP', is_flag=True,
              help='Skip a scrape while the previous one is still running')
@click.option('--workers', envvar='COLLECT_WORKERS', type=click.IntRange(min=1), default=DEFAULT_PARALLEL_WORKERS,
              show_default=True, help='Number of parallel fetch workers')
def cli(
    verbose: int,
    bind: str,
    metrics_path: str,
    scrape_time: float,
    azure_subscription: Tuple[str, ...],
    azure_location: Tuple[str, ...],
    collect_subscription: bool,
    collect_resourcegroup: bool,
    collect_compliance: bool,
    collect_advisor: bool,
    task_timeout: float,
    no_overlap: bool,
    workers: int
) -> None:
    """Azure Audit exporter - Azure audit facts as Prometheus metrics.

    Periodically collects subscription, resource group, SecurityCenter
    compliance and Advisor recommendation facts and serves them for
    Prometheus scraping.
    """
    configure_logging(verbose)

    config = build_config(
        bind=bind,
        metrics_path=metrics_path,
        scrape_interval=scrape_time,
        subscription_ids=list(azure_subscription),
        locations=list(azure_location),
        collect_subscription=collect_subscription,
        collect_resource_group=collect_resourcegroup,
        collect_compliance=collect_compliance,
        collect_advisor=collect_advisor,
        task_timeout=task_timeout,
        allow_overlap=not no_overlap,
        parallel_workers=workers,
        verbosity=verbose,
    )

    logger.info(f"Init Azure Audit exporter v{VERSION} (written by {AUTHOR})")
    try:
        context = bootstrap(config)
        asyncio.run(serve(context))
    except KeyboardInterrupt:
        console.print(f"\n[yellow]{INFO_OPERATION_CANCELLED}[/yellow]")
        sys.exit(EXIT_KEYBOARD_INTERRUPT)


def main() -> None:
    """Main entry point."""
    load_env_file()
    try:
        cli()
    except ExporterError as e:
        logger.debug("Startup failed", exc_info=True)
        console.print(f"[red]{ERROR_STARTUP.format(e)}[/red]")
        sys.exit(EXIT_ERROR)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]{ERROR_UNEXPECTED.format(str(e))}[/red]")
        console.print(f"[dim]{INFO_RUN_WITH_VERBOSE}[/dim]")
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
