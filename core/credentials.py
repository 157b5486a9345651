"""Credential helpers for storage locations.

Credentials are the azure-core credential objects accepted by the storage
client libraries. They are carried around untouched; nothing in this
package reads the secret material except :func:`sas_token`, which wraps a
raw query string.
"""

from __future__ import annotations

from typing import Optional, Union

from azure.core.credentials import AzureNamedKeyCredential, AzureSasCredential, TokenCredential

StorageCredentials = Optional[Union[AzureNamedKeyCredential, AzureSasCredential, TokenCredential]]


def shared_key(account: str, key: str) -> AzureNamedKeyCredential:
    return AzureNamedKeyCredential(account, key)


def sas_token(token: str) -> AzureSasCredential:
    """Wrap a SAS query string, dropping a leading ``?`` if present."""

    token = token[1:] if token.startswith("?") else token
    if not token:
        raise ValueError("SAS token must not be empty")
    return AzureSasCredential(token)


def anonymous() -> None:
    return None


def describe_credentials(credentials: StorageCredentials) -> str:
    """Return a human-readable description that never includes secrets."""

    if credentials is None:
        return "anonymous"
    if isinstance(credentials, AzureNamedKeyCredential):
        return f"shared key (account {credentials.named_key.name})"
    if isinstance(credentials, AzureSasCredential):
        return "SAS token"
    return f"token credential ({type(credentials).__name__})"


__all__ = [
    "StorageCredentials",
    "anonymous",
    "describe_credentials",
    "sas_token",
    "shared_key",
]
