"""Azure storage configuration for local development.

Endpoints and connection strings for the Azurite emulator, built from the
well-known development account defined in :mod:`core.cloud_location`.
"""

from __future__ import annotations

from core.cloud_location import (
    DEFAULT_EMULATOR_ADDRESS,
    EMULATOR_ACCOUNT,
    EMULATOR_ACCOUNT_KEY,
    EMULATOR_PORTS,
    Emulator,
)
from core.service_type import ServiceType

# Azurite port constants
AZURITE_PORTS = EMULATOR_PORTS
AZURITE_BLOB_PORT: int = AZURITE_PORTS[ServiceType.BLOB]
AZURITE_QUEUE_PORT: int = AZURITE_PORTS[ServiceType.QUEUE]
AZURITE_TABLE_PORT: int = AZURITE_PORTS[ServiceType.TABLE]

# Default development storage account
DEVSTORE_ACCOUNT_NAME: str = EMULATOR_ACCOUNT
DEVSTORE_ACCOUNT_KEY: str = EMULATOR_ACCOUNT_KEY


def azurite_location(service_type: ServiceType, address: str = DEFAULT_EMULATOR_ADDRESS) -> Emulator:
    """Return the emulator location serving ``service_type`` on its Azurite port."""

    try:
        port = AZURITE_PORTS[service_type]
    except KeyError:
        raise ValueError(f"Azurite does not serve the {service_type.value} service") from None
    return Emulator(address, port)


def dev_storage_connection_string() -> str:
    """Generate Azurite connection string for local development.

    Returns:
        Connection string for local Azurite endpoints.

    Example:
        "DefaultEndpointsProtocol=http;AccountName=devstoreaccount1;..."
    """
    return (
        f"DefaultEndpointsProtocol=http;"
        f"AccountName={DEVSTORE_ACCOUNT_NAME};"
        f"AccountKey={DEVSTORE_ACCOUNT_KEY};"
        f"BlobEndpoint={dev_blob_endpoint()};"
        f"QueueEndpoint={dev_queue_endpoint()};"
        f"TableEndpoint={dev_table_endpoint()};"
    )


def dev_blob_endpoint() -> str:
    """Get Azurite blob service endpoint."""
    return azurite_location(ServiceType.BLOB).url(ServiceType.BLOB)


def dev_queue_endpoint() -> str:
    """Get Azurite queue service endpoint."""
    return azurite_location(ServiceType.QUEUE).url(ServiceType.QUEUE)


def dev_table_endpoint() -> str:
    """Get Azurite table service endpoint."""
    return azurite_location(ServiceType.TABLE).url(ServiceType.TABLE)
