"""Pytest configuration and shared fixtures."""

import threading
import time
from typing import Dict, List, Optional, Set, Tuple

import pytest
from azure.core.exceptions import HttpResponseError
from click.testing import CliRunner

from azure_audit_exporter.context import AppContext
from azure_audit_exporter.metrics.registry import SnapshotRegistry
from azure_audit_exporter.models import (
    Account,
    AdvisorRecommendation,
    ComplianceSegment,
    ExporterConfig,
    ResourceGroupInfo,
    SubscriptionInfo,
)
from azure_audit_exporter.providers.base import ResourceClientBase


class FakeResourceClient(ResourceClientBase):
    """In-memory resource client with configurable data and failures."""

    def __init__(self) -> None:
        self.subscriptions: Dict[str, SubscriptionInfo] = {}
        self.resource_groups: Dict[str, List[ResourceGroupInfo]] = {}
        self.compliance: Dict[str, List[ComplianceSegment]] = {}
        self.recommendations: Dict[str, List[AdvisorRecommendation]] = {}
        self.failures: Set[Tuple[str, str]] = set()
        self.gates: Dict[str, threading.Event] = {}
        self.calls: List[Tuple[str, str, Optional[str]]] = []
        self.delay = 0.0
        self._lock = threading.Lock()

    def _enter(self, category: str, account: Account, region: Optional[str] = None) -> None:
        with self._lock:
            self.calls.append((category, account.subscription_id, region))
        gate = self.gates.get(category)
        if gate is not None:
            gate.wait(5)
        if self.delay:
            time.sleep(self.delay)
        if (category, account.subscription_id) in self.failures:
            raise HttpResponseError(message=f"{category} unavailable")

    def fetch_subscription(self, account):
        self._enter("subscription", account)
        info = self.subscriptions.get(account.subscription_id)
        return [info] if info else []

    def fetch_resource_groups(self, account):
        self._enter("resourcegroup", account)
        return list(self.resource_groups.get(account.subscription_id, []))

    def fetch_compliance(self, account, region):
        self._enter("compliance", account, region)
        return list(self.compliance.get(account.subscription_id, []))

    def fetch_recommendations(self, account):
        self._enter("advisor", account)
        return list(self.recommendations.get(account.subscription_id, []))


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def accounts():
    """Two audited subscriptions."""
    return [
        Account(subscription_id="sub-a", display_name="Subscription A"),
        Account(subscription_id="sub-b", display_name="Subscription B"),
    ]


@pytest.fixture
def fake_client():
    """Create an empty fake resource client."""
    return FakeResourceClient()


@pytest.fixture
def exporter_config():
    """Configuration collecting every category in a single location."""
    return ExporterConfig(
        scrape_interval=60,
        locations=["westeurope"],
        collect_subscription=True,
        collect_resource_group=True,
        collect_compliance=True,
        collect_advisor=True,
        task_timeout=5,
        parallel_workers=4,
    )


@pytest.fixture
def make_context(exporter_config, fake_client, accounts):
    """Factory for application contexts; closes them after the test."""
    created = []

    def _make(config=None, client=None, account_list=None):
        context = AppContext(
            config=config or exporter_config,
            client=client or fake_client,
            accounts=accounts if account_list is None else account_list,
            registry=SnapshotRegistry(),
        )
        created.append(context)
        return context

    yield _make

    for context in created:
        context.close()
