"""Azure credential bootstrap."""

import logging
import os
from typing import Mapping, Optional

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError, ClientAuthenticationError
from azure.identity import ClientSecretCredential, DefaultAzureCredential

from ..constants import AZURE_MGMT_SCOPE
from ..exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class AzureCredentialProvider:
    """Builds and validates the Azure credential used by all clients."""

    def __init__(
        self,
        tenant_id: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None
    ) -> None:
        """Initialize Azure credential provider.

        Args:
            tenant_id: Service principal tenant ID
            client_id: Service principal client ID
            client_secret: Service principal client secret
        """
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "AzureCredentialProvider":
        """Create a provider from the standard AZURE_* environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            tenant_id=environ.get("AZURE_TENANT_ID"),
            client_id=environ.get("AZURE_CLIENT_ID"),
            client_secret=environ.get("AZURE_CLIENT_SECRET"),
        )

    @property
    def uses_service_principal(self) -> bool:
        """Whether service principal credentials are configured."""
        return all([self.tenant_id, self.client_id, self.client_secret])

    def _build(self) -> TokenCredential:
        if self.uses_service_principal:
            return ClientSecretCredential(
                tenant_id=self.tenant_id,
                client_id=self.client_id,
                client_secret=self.client_secret
            )
        # Default credential chain (environment, managed identity, CLI, etc.)
        return DefaultAzureCredential()

    def get_credential(self) -> TokenCredential:
        """Build the credential and acquire a management token to verify it.

        Raises:
            AuthenticationError: if no token can be acquired
        """
        auth_type = "service_principal" if self.uses_service_principal else "default_chain"
        try:
            credential = self._build()
            credential.get_token(AZURE_MGMT_SCOPE)
        except (ClientAuthenticationError, AzureError, ValueError) as e:
            raise AuthenticationError(
                "Azure authentication failed",
                context={"auth_type": auth_type},
                cause=e
            ) from e

        logger.info(f"Authenticated with Azure using {auth_type} credential")
        return credential
