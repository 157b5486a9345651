"""Cloud locations for Azure Storage accounts.

A :class:`CloudLocation` names the cloud a storage account lives in and
carries the credentials used to reach it. Each variant knows how to build
the base URL of a storage service:

* :class:`PublicCloud`, :class:`ChinaCloud` and :class:`USGovCloud` build
  ``https://{account}.{service}.{domain suffix}``.
* :class:`Emulator` points at a local Azurite instance using the well-known
  development account.
* :class:`AutoDetect` picks one of the three clouds above from the
  environment each time a URL is requested.
* :class:`CustomCloud` returns a caller-supplied base URL.

:meth:`CloudLocation.from_url` performs the reverse operation for SAS URLs.
"""

from __future__ import annotations

import ipaddress
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Type, Union
from urllib.parse import urlsplit, urlunsplit

from azure.core.credentials import AzureNamedKeyCredential, AzureSasCredential

from core.cloud_name import (
    AZURE_CHINA_CLOUD,
    AZURE_CLOUD,
    AZURE_PUBLIC_CLOUD,
    AZURE_US_GOVERNMENT,
    SUPPORTED_CLOUD_NAMES,
    CloudNameLookup,
    EnvironmentCloudNameLookup,
)
from core.credentials import StorageCredentials
from core.exceptions import CloudDetectionError, DataConversionError, UnknownCloudError, UrlParseError
from core.service_type import ServiceType

logger = logging.getLogger(__name__)

# Well-known Azurite / storage emulator account. Publicly documented, not a secret:
# https://learn.microsoft.com/azure/storage/common/storage-use-azurite#well-known-storage-account-and-key
EMULATOR_ACCOUNT = "devstoreaccount1"
EMULATOR_ACCOUNT_KEY = "Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=="
EMULATOR_CREDENTIALS = AzureNamedKeyCredential(EMULATOR_ACCOUNT, EMULATOR_ACCOUNT_KEY)

DEFAULT_EMULATOR_ADDRESS = "127.0.0.1"
DEFAULT_EMULATOR_PORT = 10000

# Azurite listens on a separate port per service.
EMULATOR_PORTS: Dict[ServiceType, int] = {
    ServiceType.BLOB: 10000,
    ServiceType.QUEUE: 10001,
    ServiceType.TABLE: 10002,
}

ServiceTypeLike = Union[ServiceType, str]


def _normalise_url(raw: str) -> str:
    """Validate an absolute URL and return it with an empty path rendered as ``/``."""

    if not raw or any(ch.isspace() for ch in raw):
        raise UrlParseError(f"Invalid URL '{raw}': URLs must be non-empty and contain no whitespace")
    try:
        parts = urlsplit(raw)
        parts.port  # raises ValueError when out of range or non-numeric
    except ValueError as exc:
        raise UrlParseError(f"Invalid URL '{raw}': {exc}") from exc
    if not parts.scheme or not parts.hostname:
        raise UrlParseError(f"Invalid URL '{raw}': an absolute URL with a host is required")
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{hostport.lower()}"
    return urlunsplit((parts.scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def _require_account(account: str) -> None:
    if not isinstance(account, str) or not account:
        raise ValueError("Storage account name must be a non-empty string")


class CloudLocation(ABC):
    """Base class for every cloud location variant."""

    credentials: StorageCredentials

    @abstractmethod
    def url(self, service_type: ServiceTypeLike) -> str:
        """Return the base URL of ``service_type`` for this location."""

    @staticmethod
    def public(account: str, credentials: StorageCredentials = None) -> "PublicCloud":
        return PublicCloud(account, credentials)

    @staticmethod
    def china(account: str, credentials: StorageCredentials = None) -> "ChinaCloud":
        return ChinaCloud(account, credentials)

    @staticmethod
    def us_gov(account: str, credentials: StorageCredentials = None) -> "USGovCloud":
        return USGovCloud(account, credentials)

    @staticmethod
    def emulator(address: str = DEFAULT_EMULATOR_ADDRESS, port: int = DEFAULT_EMULATOR_PORT) -> "Emulator":
        return Emulator(address, port)

    @staticmethod
    def custom(uri: str, credentials: StorageCredentials = None) -> "CustomCloud":
        return CustomCloud(uri, credentials)

    @staticmethod
    def auto_detect(
        account: str,
        credentials: StorageCredentials = None,
        *,
        lookup: Optional[CloudNameLookup] = None,
    ) -> "AutoDetect":
        """Return a location that picks its cloud from the environment.

        The ``AZURE_CLOUD_NAME`` variable is consulted first, then the
        ``[cloud]`` section of ``$HOME/.azure/config``. Pass ``lookup`` to
        replace both sources.
        """

        if lookup is None:
            return AutoDetect(account, credentials)
        return AutoDetect(account, credentials, lookup=lookup)

    @staticmethod
    def from_url(url: str) -> "CloudLocation":
        return location_from_url(url)


@dataclass(frozen=True)
class _AccountCloud(CloudLocation):
    account: str
    credentials: StorageCredentials = None

    DOMAIN_SUFFIX: ClassVar[str] = ""

    def __post_init__(self) -> None:
        _require_account(self.account)

    def url(self, service_type: ServiceTypeLike) -> str:
        subdomain = ServiceType.parse(service_type).subdomain
        return _normalise_url(f"https://{self.account}.{subdomain}.{self.DOMAIN_SUFFIX}")


@dataclass(frozen=True)
class PublicCloud(_AccountCloud):
    """The commercial Azure cloud."""

    DOMAIN_SUFFIX: ClassVar[str] = "core.windows.net"


@dataclass(frozen=True)
class ChinaCloud(_AccountCloud):
    """Azure operated in mainland China."""

    DOMAIN_SUFFIX: ClassVar[str] = "core.chinacloudapi.cn"


@dataclass(frozen=True)
class USGovCloud(_AccountCloud):
    """Azure US Government."""

    DOMAIN_SUFFIX: ClassVar[str] = "core.usgovcloudapi.net"


@dataclass(frozen=True)
class Emulator(CloudLocation):
    """A local storage emulator reached with the well-known development account."""

    address: str = DEFAULT_EMULATOR_ADDRESS
    port: int = DEFAULT_EMULATOR_PORT

    def __post_init__(self) -> None:
        if not self.address:
            raise ValueError("Emulator address must be a non-empty string")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 <= self.port <= 65535:
            raise ValueError(f"Emulator port must be an integer between 0 and 65535, got {self.port!r}")

    @property
    def credentials(self) -> AzureNamedKeyCredential:  # type: ignore[override]
        return EMULATOR_CREDENTIALS

    def url(self, service_type: ServiceTypeLike) -> str:
        host = f"[{self.address}]" if ":" in self.address else self.address
        return _normalise_url(f"http://{host}:{self.port}/{EMULATOR_ACCOUNT}")


@dataclass(frozen=True)
class CustomCloud(CloudLocation):
    """A caller-supplied base URL used verbatim for every service."""

    uri: str
    credentials: StorageCredentials = None

    def url(self, service_type: ServiceTypeLike) -> str:
        return _normalise_url(self.uri)


@dataclass(frozen=True)
class AutoDetect(CloudLocation):
    """Defer the choice of cloud to the environment at URL resolution time."""

    account: str
    credentials: StorageCredentials = None
    lookup: CloudNameLookup = field(default_factory=EnvironmentCloudNameLookup, compare=False)

    def __post_init__(self) -> None:
        _require_account(self.account)

    def resolve(self) -> _AccountCloud:
        """Return the concrete cloud location selected by the current environment."""

        name = self.lookup.find_cloud_name()
        if not name:
            raise CloudDetectionError()
        location_type = KNOWN_CLOUD_NAMES.get(name)
        if location_type is None:
            raise UnknownCloudError(name, SUPPORTED_CLOUD_NAMES)
        logger.debug("[cloud_location] Auto-detected cloud %s for account %s", name, self.account)
        return location_type(self.account, self.credentials)

    def url(self, service_type: ServiceTypeLike) -> str:
        return self.resolve().url(service_type)


KNOWN_CLOUD_NAMES: Dict[str, Type[_AccountCloud]] = {
    AZURE_CLOUD: PublicCloud,
    AZURE_PUBLIC_CLOUD: PublicCloud,
    AZURE_US_GOVERNMENT: USGovCloud,
    AZURE_CHINA_CLOUD: ChinaCloud,
}

_CLOUDS_BY_SUFFIX: Dict[str, Type[_AccountCloud]] = {
    cloud.DOMAIN_SUFFIX: cloud for cloud in (PublicCloud, ChinaCloud, USGovCloud)
}


def cloud_for_domain_suffix(suffix: str) -> Optional[Type[_AccountCloud]]:
    """Return the cloud variant owning ``suffix`` (e.g. ``core.windows.net``), if any."""

    return _CLOUDS_BY_SUFFIX.get(suffix.strip(".").lower())


def location_from_url(url: str) -> CloudLocation:
    """Rebuild a location from a SAS URL.

    The whole query string becomes the SAS credential. The host must be
    ``{account}.{service}.{suffix}`` for one of the known clouds, or an IPv4
    emulator address with an explicit port and a path starting with the
    well-known emulator account. The service label is not checked.
    """

    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise DataConversionError(f"Unable to parse URL '{url}': {exc}") from exc

    if not parts.query:
        raise DataConversionError("unable to find SAS token in URL")
    credentials = AzureSasCredential(parts.query)

    host = parts.hostname
    if not host:
        raise DataConversionError("unable to find the target host in the URL")

    labels = host.split(".")
    if labels[-1] == "":
        labels.pop()
    if len(labels) < 2:
        raise DataConversionError(f"URL refers to a domain that is not a Public or China domain: {host}")

    account, _service, *rest = labels
    location_type = _CLOUDS_BY_SUFFIX.get(".".join(rest))
    if location_type is not None:
        try:
            return location_type(account, credentials)
        except ValueError as exc:
            raise DataConversionError(f"URL does not name a storage account: {host}") from exc

    try:
        port = parts.port
    except ValueError as exc:
        raise DataConversionError(f"URL has an invalid port: {url}") from exc

    if parts.path.lstrip("/").startswith(EMULATOR_ACCOUNT) and port is not None:
        try:
            address = ipaddress.IPv4Address(host)
        except ValueError:
            raise DataConversionError(f"Unsupported emulator URL, expected ipv4: {host}") from None
        return Emulator(str(address), port)

    raise DataConversionError(
        f"URL refers to a domain that is not a Emulator, Public, China, or USGov domain: {host}"
    )


public = CloudLocation.public
china = CloudLocation.china
us_gov = CloudLocation.us_gov
emulator = CloudLocation.emulator
custom = CloudLocation.custom
auto_detect = CloudLocation.auto_detect


__all__ = [
    "AutoDetect",
    "ChinaCloud",
    "CloudLocation",
    "CustomCloud",
    "DEFAULT_EMULATOR_ADDRESS",
    "DEFAULT_EMULATOR_PORT",
    "EMULATOR_ACCOUNT",
    "EMULATOR_ACCOUNT_KEY",
    "EMULATOR_CREDENTIALS",
    "EMULATOR_PORTS",
    "Emulator",
    "KNOWN_CLOUD_NAMES",
    "PublicCloud",
    "USGovCloud",
    "auto_detect",
    "china",
    "cloud_for_domain_suffix",
    "custom",
    "emulator",
    "location_from_url",
    "public",
    "us_gov",
]
