"""Exporter configuration model."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import (
    DEFAULT_AZURE_LOCATIONS,
    DEFAULT_METRICS_PATH,
    DEFAULT_PARALLEL_WORKERS,
    DEFAULT_SERVER_BIND,
    DEFAULT_TASK_TIMEOUT_SECONDS,
)
from .base import Category


def parse_bind_address(bind: str) -> Tuple[Optional[str], int]:
    """Split a ``host:port`` bind address.

    An empty host (``:8080``) means all interfaces and is returned as None.
    IPv6 hosts may be given in brackets (``[::1]:8080``).
    """
    host, sep, port = bind.rpartition(":")
    if not sep:
        raise ValueError(f"bind address '{bind}' must be in host:port form")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid port '{port}' in bind address '{bind}'")
    if not 0 <= port_number <= 65535:
        raise ValueError(f"port {port_number} out of range in bind address '{bind}'")
    return host or None, port_number


class ExporterConfig(BaseModel):
    """Validated exporter configuration."""

    bind: str = Field(DEFAULT_SERVER_BIND, description="Server address")
    metrics_path: str = Field(DEFAULT_METRICS_PATH, description="Exposition path")
    scrape_interval: float = Field(300.0, gt=0, description="Scrape interval in seconds")
    subscription_ids: List[str] = Field(
        default_factory=list, description="Azure subscription IDs, empty to discover all"
    )
    locations: List[str] = Field(
        default_factory=lambda: list(DEFAULT_AZURE_LOCATIONS), description="Azure locations"
    )
    collect_subscription: bool = Field(False, description="Collect subscription metrics")
    collect_resource_group: bool = Field(False, description="Collect resourcegroup metrics")
    collect_compliance: bool = Field(True, description="Collect Security Center compliance")
    collect_advisor: bool = Field(True, description="Collect Advisor recommendations")
    task_timeout: Optional[float] = Field(
        DEFAULT_TASK_TIMEOUT_SECONDS, gt=0, description="Per fetch task timeout in seconds"
    )
    allow_overlap: bool = Field(True, description="Launch cycles even if the previous one is running")
    parallel_workers: int = Field(DEFAULT_PARALLEL_WORKERS, ge=1, description="Fetch worker threads")
    verbosity: int = Field(0, ge=0, description="Verbosity level")

    @field_validator("bind")
    @classmethod
    def _validate_bind(cls, value: str) -> str:
        parse_bind_address(value)
        return value

    @field_validator("metrics_path")
    @classmethod
    def _validate_metrics_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("metrics path must start with '/'")
        return value

    @field_validator("subscription_ids", "locations")
    @classmethod
    def _strip_empty(cls, value: List[str]) -> List[str]:
        return [item.strip() for item in value if item and item.strip()]

    @model_validator(mode="after")
    def _require_locations(self) -> "ExporterConfig":
        if self.collect_compliance and not self.locations:
            raise ValueError("at least one Azure location is required to collect compliance")
        return self

    @property
    def host(self) -> Optional[str]:
        """Host part of the bind address, None for all interfaces."""
        return parse_bind_address(self.bind)[0]

    @property
    def port(self) -> int:
        """Port part of the bind address."""
        return parse_bind_address(self.bind)[1]

    @property
    def enabled_categories(self) -> List[Category]:
        """Categories collected on every cycle."""
        flags = [
            (Category.SUBSCRIPTION, self.collect_subscription),
            (Category.RESOURCE_GROUP, self.collect_resource_group),
            (Category.COMPLIANCE, self.collect_compliance),
            (Category.ADVISOR, self.collect_advisor),
        ]
        return [category for category, enabled in flags if enabled]
