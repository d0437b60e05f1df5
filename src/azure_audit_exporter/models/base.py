"""Base models for audited accounts and collected records."""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass


class Category(Enum):
    """Audit fact categories, one metric series each."""
    SUBSCRIPTION = "subscription"
    RESOURCE_GROUP = "resourcegroup"
    COMPLIANCE = "compliance"
    ADVISOR = "advisor"


@dataclass(frozen=True)
class Account:
    """An Azure subscription under audit."""
    subscription_id: str
    display_name: Optional[str] = None

    def __str__(self) -> str:
        return self.subscription_id


@dataclass(frozen=True)
class Record:
    """One observation produced by a fetch task."""
    category: Category
    labels: Tuple[str, ...]
    value: float = 1.0
