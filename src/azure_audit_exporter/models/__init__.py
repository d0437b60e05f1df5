"""Core data models for the Azure audit exporter."""

from .base import Account, Category, Record
from .collection import CollectionRun, CollectionStatus
from .config import ExporterConfig, parse_bind_address
from .resources import (
    AdvisorRecommendation,
    ComplianceSegment,
    ResourceGroupInfo,
    SubscriptionInfo,
)

__all__ = [
    'Account',
    'Category',
    'Record',
    'CollectionRun',
    'CollectionStatus',
    'ExporterConfig',
    'parse_bind_address',
    'AdvisorRecommendation',
    'ComplianceSegment',
    'ResourceGroupInfo',
    'SubscriptionInfo'
]
