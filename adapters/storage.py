"""Storage adapter that builds Azure Table clients from cloud locations."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from azure.core.exceptions import ResourceExistsError
from azure.data.tables import TableClient, TableServiceClient

from core.cloud_location import CloudLocation
from core.credentials import describe_credentials
from core.service_type import ServiceType
from core.settings import StorageSettings

logger = logging.getLogger(__name__)

_SERVICE_LOCK = Lock()
_service: Optional[TableServiceClient] = None


def get_table_service(location: CloudLocation) -> TableServiceClient:
    """Return a :class:`TableServiceClient` for the table endpoint of ``location``."""

    endpoint = location.url(ServiceType.TABLE)
    logger.info(
        "[storage] Connecting to table endpoint %s using %s",
        endpoint,
        describe_credentials(location.credentials),
    )
    return TableServiceClient(endpoint=endpoint, credential=location.credentials)


def _get_service() -> TableServiceClient:
    """Return a cached service built from the environment settings."""

    global _service

    if _service is None:
        with _SERVICE_LOCK:
            if _service is None:
                location = StorageSettings.from_env().to_location(ServiceType.TABLE)
                _service = get_table_service(location)

    return _service


def reset_service() -> None:
    """Drop the cached service so the next call re-reads the environment."""

    global _service

    with _SERVICE_LOCK:
        _service = None


def get_table_client(table_name: str, location: Optional[CloudLocation] = None) -> TableClient:
    """Return a table client, creating the table if necessary."""

    service = get_table_service(location) if location is not None else _get_service()
    try:
        service.create_table_if_not_exists(table_name=table_name)
    except ResourceExistsError:
        pass

    return service.get_table_client(table_name)


__all__ = ["get_table_client", "get_table_service", "reset_service"]
