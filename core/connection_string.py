"""Parse Azure Storage connection strings into cloud locations."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union
from urllib.parse import urlsplit

from core.cloud_location import (
    DEFAULT_EMULATOR_ADDRESS,
    DEFAULT_EMULATOR_PORT,
    EMULATOR_PORTS,
    CloudLocation,
    CustomCloud,
    Emulator,
    PublicCloud,
    cloud_for_domain_suffix,
)
from core.credentials import StorageCredentials, sas_token, shared_key
from core.exceptions import DataConversionError
from core.service_type import ServiceType

logger = logging.getLogger(__name__)

_ENDPOINT_KEYS = {
    ServiceType.BLOB: "blobendpoint",
    ServiceType.QUEUE: "queueendpoint",
    ServiceType.FILE: "fileendpoint",
    ServiceType.TABLE: "tableendpoint",
}


def _split_pairs(value: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for segment in value.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key, sep, item = segment.partition("=")
        if not sep or not key.strip():
            raise DataConversionError(f"Connection string segment '{key.strip()}' is not a key=value pair")
        pairs[key.strip().lower()] = item.strip()
    return pairs


def _credentials(pairs: Dict[str, str]) -> StorageCredentials:
    signature = pairs.get("sharedaccesssignature")
    if signature:
        return sas_token(signature)
    key = pairs.get("accountkey")
    if key:
        account = pairs.get("accountname")
        if not account:
            raise DataConversionError("Connection string provides AccountKey without AccountName")
        return shared_key(account, key)
    return None


def _emulator_location(pairs: Dict[str, str], service_type: Optional[ServiceType]) -> Emulator:
    port = EMULATOR_PORTS.get(service_type or ServiceType.BLOB, DEFAULT_EMULATOR_PORT)
    proxy = pairs.get("developmentstorageproxyuri")
    if not proxy:
        return Emulator(DEFAULT_EMULATOR_ADDRESS, port)
    try:
        parts = urlsplit(proxy)
        proxy_port = parts.port
    except ValueError as exc:
        raise DataConversionError(f"Invalid DevelopmentStorageProxyUri '{proxy}': {exc}") from exc
    if not parts.hostname:
        raise DataConversionError(f"Invalid DevelopmentStorageProxyUri '{proxy}': missing host")
    # An explicit proxy port serves every service.
    return Emulator(parts.hostname, proxy_port if proxy_port is not None else port)


def parse_connection_string(
    value: str,
    service_type: Optional[Union[ServiceType, str]] = None,
) -> CloudLocation:
    """Return the location described by a storage connection string.

    When ``service_type`` is given, only that service's endpoint (for example
    ``TableEndpoint``) is used; if it is absent the location falls back to
    ``AccountName``/``EndpointSuffix``. Without a service type the first
    endpoint present (blob, queue, file, table) wins. Development storage
    maps to the Azurite port of the requested service.
    """

    if not value or not value.strip():
        raise DataConversionError("Connection string is empty")

    pairs = _split_pairs(value)
    requested = ServiceType.parse(service_type) if service_type is not None else None

    if pairs.get("usedevelopmentstorage", "").lower() == "true":
        logger.debug("[connection_string] Connection string targets the storage emulator")
        return _emulator_location(pairs, requested)

    credentials = _credentials(pairs)

    if requested is None:
        keys = list(_ENDPOINT_KEYS.values())
    else:
        keys = [_ENDPOINT_KEYS[requested]] if requested in _ENDPOINT_KEYS else []
    for key in keys:
        endpoint = pairs.get(key)
        if endpoint:
            return CustomCloud(endpoint, credentials)

    account = pairs.get("accountname")
    if not account:
        raise DataConversionError("Connection string must provide AccountName or a service endpoint")

    suffix = pairs.get("endpointsuffix", PublicCloud.DOMAIN_SUFFIX)
    location_type = cloud_for_domain_suffix(suffix)
    if location_type is not None:
        return location_type(account, credentials)

    protocol = pairs.get("defaultendpointsprotocol", "https")
    subdomain = (requested or ServiceType.BLOB).subdomain
    logger.debug("[connection_string] Unknown endpoint suffix %s; using a custom base URL", suffix)
    return CustomCloud(f"{protocol}://{account}.{subdomain}.{suffix.strip('.')}", credentials)


__all__ = ["parse_connection_string"]
