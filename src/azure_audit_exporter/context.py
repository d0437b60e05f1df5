"""Application context shared by the scheduler and the collection cycle."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from .metrics.registry import SnapshotRegistry
from .models.base import Account
from .models.config import ExporterConfig
from .providers.base import ResourceClientBase


@dataclass
class AppContext:
    """Process-wide state, created once at startup.

    The account list is resolved before the first cycle and not changed
    afterwards.
    """
    config: ExporterConfig
    client: ResourceClientBase
    accounts: List[Account]
    registry: SnapshotRegistry = field(default_factory=SnapshotRegistry)
    executor: Optional[ThreadPoolExecutor] = None

    def __post_init__(self):
        """Create the fetch worker pool if not provided."""
        if self.executor is None:
            self.executor = ThreadPoolExecutor(
                max_workers=self.config.parallel_workers,
                thread_name_prefix="fetch"
            )

    def close(self) -> None:
        """Release the worker pool."""
        if self.executor:
            self.executor.shutdown(wait=False, cancel_futures=True)
