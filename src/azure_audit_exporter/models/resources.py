"""Category-specific records returned by resource clients."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SubscriptionInfo:
    """Subscription metadata."""
    subscription_id: str
    display_name: str = ""
    spending_limit: str = ""
    quota_id: str = ""
    location_placement_id: str = ""


@dataclass(frozen=True)
class ResourceGroupInfo:
    """A resource group of a subscription."""
    name: str
    location: str = ""


@dataclass(frozen=True)
class ComplianceSegment:
    """One assessment segment of a Security Center compliance snapshot."""
    segment_type: Optional[str]
    percentage: float


@dataclass(frozen=True)
class AdvisorRecommendation:
    """An Advisor recommendation for a subscription."""
    id: str
    category: str = ""
    impacted_field: str = ""
    impacted_value: str = ""
    impact: str = ""
    risk: str = ""
