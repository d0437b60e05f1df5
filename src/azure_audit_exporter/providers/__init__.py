"""Resource clients for Azure audit facts."""

from .azure import AzureResourceClient
from .base import ResourceClientBase

__all__ = ["AzureResourceClient", "ResourceClientBase"]
