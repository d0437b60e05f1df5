"""Abstract interface for audit resource clients."""

from abc import ABC, abstractmethod
from typing import List

from ..models.base import Account
from ..models.resources import (
    AdvisorRecommendation,
    ComplianceSegment,
    ResourceGroupInfo,
    SubscriptionInfo,
)


class ResourceClientBase(ABC):
    """Fetches one category of audit facts for one account.

    Implementations are called from worker threads and must be safe to
    call concurrently. Any exception raised is treated as a failure of
    that single fetch.
    """

    @abstractmethod
    def fetch_subscription(self, account: Account) -> List[SubscriptionInfo]:
        """Fetch subscription metadata."""
        pass

    @abstractmethod
    def fetch_resource_groups(self, account: Account) -> List[ResourceGroupInfo]:
        """Fetch the resource groups of a subscription."""
        pass

    @abstractmethod
    def fetch_compliance(self, account: Account, region: str) -> List[ComplianceSegment]:
        """Fetch the Security Center compliance segments of a subscription."""
        pass

    @abstractmethod
    def fetch_recommendations(self, account: Account) -> List[AdvisorRecommendation]:
        """Fetch the Advisor recommendations of a subscription."""
        pass
