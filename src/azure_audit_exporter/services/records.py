"""Conversion of fetched resources into metric records."""

import re
from typing import List

from ..models.base import Account, Category, Record
from ..models.resources import (
    AdvisorRecommendation,
    ComplianceSegment,
    ResourceGroupInfo,
    SubscriptionInfo,
)

RESOURCE_GROUP_PATTERN = re.compile(r"resourceGroups/([^/]*)")


def extract_resource_group(resource_id: str) -> str:
    """Return the resource group segment of an Azure resource ID, or ''."""
    match = RESOURCE_GROUP_PATTERN.search(resource_id or "")
    if match:
        return match.group(1)
    return ""


def subscription_records(account: Account, items: List[SubscriptionInfo]) -> List[Record]:
    return [
        Record(
            category=Category.SUBSCRIPTION,
            labels=(
                item.subscription_id or account.subscription_id,
                item.display_name,
                item.spending_limit,
                item.quota_id,
                item.location_placement_id,
            ),
        )
        for item in items
    ]


def resource_group_records(account: Account, items: List[ResourceGroupInfo]) -> List[Record]:
    return [
        Record(
            category=Category.RESOURCE_GROUP,
            labels=(account.subscription_id, item.name, item.location),
        )
        for item in items
    ]


def compliance_records(account: Account, items: List[ComplianceSegment]) -> List[Record]:
    # Values are summed per label tuple during snapshot assembly
    return [
        Record(
            category=Category.COMPLIANCE,
            labels=(account.subscription_id, item.segment_type or ""),
            value=item.percentage,
        )
        for item in items
    ]


def advisor_records(account: Account, items: List[AdvisorRecommendation]) -> List[Record]:
    return [
        Record(
            category=Category.ADVISOR,
            labels=(
                account.subscription_id,
                item.category,
                item.impacted_field,
                item.impacted_value,
                extract_resource_group(item.id),
                item.impact,
                item.risk,
            ),
        )
        for item in items
    ]
