"""Discovery of the active Azure cloud name.

The cloud name is read first from the ``AZURE_CLOUD_NAME`` environment
variable and then from the ``[cloud]`` section of the Azure CLI
configuration file at ``$HOME/.azure/config``. Lookups are injectable so
callers (and tests) can supply a fixed name or a private environment
mapping instead of the process environment.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

CLOUD_NAME_ENV_VAR = "AZURE_CLOUD_NAME"
HOME_ENV_VAR = "HOME"
CLI_CONFIG_PATH = Path(".azure") / "config"

AZURE_CLOUD = "AzureCloud"
AZURE_PUBLIC_CLOUD = "AzurePublicCloud"
AZURE_US_GOVERNMENT = "AzureUSGovernment"
AZURE_CHINA_CLOUD = "AzureChinaCloud"

# Names reported by `az cloud list`. AzureGermanCloud was retired in 2021 and is not accepted.
SUPPORTED_CLOUD_NAMES = (AZURE_CLOUD, AZURE_PUBLIC_CLOUD, AZURE_US_GOVERNMENT, AZURE_CHINA_CLOUD)


class CloudNameLookup(Protocol):
    """Contract for sources of the active cloud name."""

    def find_cloud_name(self) -> Optional[str]:
        """Return the cloud name, or None when no source provides one."""


class StaticCloudNameLookup:
    """Lookup that always reports the same cloud name."""

    def __init__(self, name: Optional[str]) -> None:
        self.name = name

    def find_cloud_name(self) -> Optional[str]:
        return self.name or None

    def __repr__(self) -> str:
        return f"StaticCloudNameLookup({self.name!r})"


class EnvironmentCloudNameLookup:
    """Lookup backed by environment variables and the Azure CLI config file.

    ``environ`` defaults to :data:`os.environ`, read at call time, so a single
    instance observes environment changes between calls.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def find_cloud_name(self) -> Optional[str]:
        environ = self.environ
        name = environ.get(CLOUD_NAME_ENV_VAR)
        if name:
            logger.debug("[cloud_name] Using cloud name %r from %s", name, CLOUD_NAME_ENV_VAR)
            return name

        home = environ.get(HOME_ENV_VAR)
        if not home:
            logger.debug("[cloud_name] %s is not set; no config file to inspect", HOME_ENV_VAR)
            return None

        config_path = Path(home) / CLI_CONFIG_PATH
        name = read_cloud_name_from_config(config_path)
        if name:
            logger.debug("[cloud_name] Using cloud name %r from %s", name, config_path)
        return name

    def __repr__(self) -> str:
        return "EnvironmentCloudNameLookup()"


def read_cloud_name_from_config(path: Path) -> Optional[str]:
    """Return the cloud name from an Azure CLI config file, or None.

    Missing or unreadable files yield None.
    """

    try:
        with open(path, encoding="utf-8") as handle:
            return parse_cloud_name(handle)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("[cloud_name] Unable to read %s: %s", path, exc)
        return None


def parse_cloud_name(lines: Iterable[str]) -> Optional[str]:
    """Scan config lines for a ``[cloud]`` header immediately followed by ``name = <value>``."""

    iterator = iter(lines)
    for line in iterator:
        if line.strip() != "[cloud]":
            continue
        following = next(iterator, None)
        if following is None:
            return None
        key, sep, value = following.partition("=")
        if sep and key.strip() == "name":
            return value.strip() or None
    return None


__all__ = [
    "AZURE_CHINA_CLOUD",
    "AZURE_CLOUD",
    "AZURE_PUBLIC_CLOUD",
    "AZURE_US_GOVERNMENT",
    "CLOUD_NAME_ENV_VAR",
    "CloudNameLookup",
    "EnvironmentCloudNameLookup",
    "StaticCloudNameLookup",
    "SUPPORTED_CLOUD_NAMES",
    "parse_cloud_name",
    "read_cloud_name_from_config",
]
