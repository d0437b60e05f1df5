"""Collection services."""

from .accounts import discover_accounts
from .collection_cycle import CollectionCycle, FetchTask
from .records import extract_resource_group
from .scheduler import ScrapeScheduler

__all__ = [
    "CollectionCycle",
    "FetchTask",
    "ScrapeScheduler",
    "discover_accounts",
    "extract_resource_group",
]
