"""Azure authentication."""

from .azure import AzureCredentialProvider

__all__ = ["AzureCredentialProvider"]
