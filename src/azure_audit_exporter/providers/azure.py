"""Azure resource client backed by the Azure management SDKs."""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from azure.core.credentials import TokenCredential
from azure.mgmt.advisor import AdvisorManagementClient
from azure.mgmt.resource import ResourceManagementClient, SubscriptionClient
from azure.mgmt.security import SecurityCenter

from ..constants import COMPLIANCE_NAME_FORMAT
from ..models.base import Account
from ..models.resources import (
    AdvisorRecommendation,
    ComplianceSegment,
    ResourceGroupInfo,
    SubscriptionInfo,
)
from .base import ResourceClientBase

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    """Render an optional SDK field (plain or enum) as a label value."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))


class AzureResourceClient(ResourceClientBase):
    """Azure implementation of the audit resource clients.

    A management client is created per call and closed afterwards, so the
    instance holds no connection state and can be shared across threads.
    """

    def __init__(self, credential: TokenCredential) -> None:
        """Initialize Azure resource client.

        Args:
            credential: Azure credential used by every management client
        """
        self.credential = credential

    def fetch_subscription(self, account: Account) -> List[SubscriptionInfo]:
        """Fetch subscription metadata."""
        with SubscriptionClient(self.credential) as client:
            sub = client.subscriptions.get(account.subscription_id)

        policies = sub.subscription_policies
        return [
            SubscriptionInfo(
                subscription_id=_text(sub.subscription_id),
                display_name=_text(sub.display_name),
                spending_limit=_text(policies.spending_limit) if policies else "",
                quota_id=_text(policies.quota_id) if policies else "",
                location_placement_id=_text(policies.location_placement_id) if policies else "",
            )
        ]

    def fetch_resource_groups(self, account: Account) -> List[ResourceGroupInfo]:
        """Fetch the resource groups of a subscription."""
        with ResourceManagementClient(self.credential, account.subscription_id) as client:
            return [
                ResourceGroupInfo(name=_text(group.name), location=_text(group.location))
                for group in client.resource_groups.list()
            ]

    def fetch_compliance(
        self,
        account: Account,
        region: str,
        day: Optional[datetime] = None
    ) -> List[ComplianceSegment]:
        """Fetch today's Security Center compliance segments.

        The compliance snapshot is subscription wide; ``region`` scopes the
        task so each configured location contributes its own segments.
        """
        scope = f"/subscriptions/{account.subscription_id}"
        compliance_name = (day or datetime.now(timezone.utc)).strftime(COMPLIANCE_NAME_FORMAT)

        with SecurityCenter(self.credential, account.subscription_id) as client:
            compliance = client.compliances.get(scope=scope, compliance_name=compliance_name)

        logger.debug(f"subscription[{account}]: compliance {compliance_name} fetched for {region}")
        return [
            ComplianceSegment(segment_type=segment.segment_type, percentage=segment.percentage or 0.0)
            for segment in (compliance.assessment_result or [])
        ]

    def fetch_recommendations(self, account: Account) -> List[AdvisorRecommendation]:
        """Fetch the Advisor recommendations of a subscription."""
        with AdvisorManagementClient(self.credential, account.subscription_id) as client:
            return [
                AdvisorRecommendation(
                    id=_text(item.id),
                    category=_text(item.category),
                    impacted_field=_text(item.impacted_field),
                    impacted_value=_text(item.impacted_value),
                    impact=_text(item.impact),
                    risk=_text(item.risk),
                )
                for item in client.recommendations.list()
            ]
