"""Enumeration of the subscriptions under audit."""

import logging
from typing import List, Optional, Sequence

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError
from azure.mgmt.resource import SubscriptionClient

from ..exceptions import AccountDiscoveryError
from ..models.base import Account

logger = logging.getLogger(__name__)


def discover_accounts(
    credential: TokenCredential,
    subscription_ids: Optional[Sequence[str]] = None,
    client: Optional[SubscriptionClient] = None
) -> List[Account]:
    """Resolve the accounts to audit.

    With no ``subscription_ids`` every subscription visible to the
    credential is returned; otherwise each listed subscription is looked up.

    Raises:
        AccountDiscoveryError: if any lookup fails
    """
    if client is None:
        with SubscriptionClient(credential) as client:
            return discover_accounts(credential, subscription_ids, client=client)

    try:
        if not subscription_ids:
            subscriptions = list(client.subscriptions.list())
        else:
            subscriptions = [client.subscriptions.get(sub_id) for sub_id in subscription_ids]
    except AzureError as e:
        raise AccountDiscoveryError(
            "Failed to enumerate Azure subscriptions",
            context={"requested": ",".join(subscription_ids or []) or "all"},
            cause=e
        ) from e

    accounts = [
        Account(subscription_id=sub.subscription_id, display_name=sub.display_name)
        for sub in subscriptions
    ]
    for account in accounts:
        logger.info(f"subscription[{account}]: found '{account.display_name}'")
    if not accounts:
        logger.warning("No Azure subscriptions found")
    return accounts
