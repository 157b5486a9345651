"""Storage settings gathered from environment variables."""

from __future__ import annotations

import logging
import os
from typing import Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.cloud_location import (
    DEFAULT_EMULATOR_ADDRESS,
    DEFAULT_EMULATOR_PORT,
    EMULATOR_PORTS,
    AutoDetect,
    ChinaCloud,
    CloudLocation,
    CustomCloud,
    Emulator,
    PublicCloud,
    USGovCloud,
)
from core.connection_string import parse_connection_string
from core.credentials import StorageCredentials, sas_token, shared_key
from core.exceptions import ConfigurationError
from core.service_type import ServiceType

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}

# Field name -> environment variables consulted in order.
ENVIRONMENT_VARIABLES = {
    "connection_string": ("AZURE_STORAGE_CONNECTION_STRING", "AzureWebJobsStorage"),
    "account_name": ("AZURE_STORAGE_ACCOUNT",),
    "account_key": ("AZURE_STORAGE_KEY",),
    "sas_token": ("AZURE_STORAGE_SAS_TOKEN",),
    "cloud": ("AZURE_STORAGE_CLOUD",),
    "endpoint": ("AZURE_STORAGE_ENDPOINT",),
    "use_emulator": ("AZURE_STORAGE_USE_EMULATOR",),
    "emulator_address": ("AZURE_STORAGE_EMULATOR_HOST",),
    "emulator_port": ("AZURE_STORAGE_EMULATOR_PORT",),
}

_ACCOUNT_CLOUDS = {
    "public": PublicCloud,
    "china": ChinaCloud,
    "usgov": USGovCloud,
}


class StorageSettings(BaseModel):
    """Validated storage configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    connection_string: Optional[str] = Field(default=None, description="Full storage connection string.")
    account_name: Optional[str] = Field(default=None, description="Storage account name.")
    account_key: Optional[str] = Field(default=None, description="Shared key for the account.")
    sas_token: Optional[str] = Field(default=None, description="SAS token query string.")
    cloud: Literal["public", "china", "usgov", "auto"] = Field(
        default="auto", description="Cloud hosting the account; 'auto' detects it from the environment."
    )
    endpoint: Optional[str] = Field(default=None, description="Custom base URL overriding the cloud.")
    use_emulator: bool = Field(default=False, description="Target the local storage emulator.")
    emulator_address: str = DEFAULT_EMULATOR_ADDRESS
    emulator_port: Optional[int] = Field(
        default=None, ge=0, le=65535, description="Emulator port; defaults to the Azurite port of the service."
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StorageSettings":
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for field_name, names in ENVIRONMENT_VARIABLES.items():
            for name in names:
                raw = environ.get(name)
                if raw:
                    values[field_name] = raw.strip()
                    break

        if "cloud" in values:
            values["cloud"] = str(values["cloud"]).lower()
        if "use_emulator" in values:
            values["use_emulator"] = str(values["use_emulator"]).lower() in _TRUE_VALUES

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid storage settings: {exc}") from exc

    def credentials(self) -> StorageCredentials:
        if self.sas_token:
            return sas_token(self.sas_token)
        if self.account_key:
            if not self.account_name:
                raise ConfigurationError("AZURE_STORAGE_KEY requires AZURE_STORAGE_ACCOUNT to be set")
            return shared_key(self.account_name, self.account_key)
        return None

    def to_location(self, service_type: Optional[Union[ServiceType, str]] = None) -> CloudLocation:
        """Build the cloud location described by these settings.

        ``service_type`` selects the matching endpoint of a connection string and
        the Azurite port when the emulator is used without an explicit port.
        """

        requested = ServiceType.parse(service_type) if service_type is not None else ServiceType.BLOB

        if self.use_emulator:
            port = self.emulator_port
            if port is None:
                port = EMULATOR_PORTS.get(requested, DEFAULT_EMULATOR_PORT)
            logger.info("[settings] Using storage emulator at %s:%s", self.emulator_address, port)
            return Emulator(self.emulator_address, port)

        if self.connection_string:
            return parse_connection_string(self.connection_string, service_type)

        credentials = self.credentials()
        if self.endpoint:
            return CustomCloud(self.endpoint, credentials)

        if not self.account_name:
            raise ConfigurationError(
                "Storage account is not configured; set AZURE_STORAGE_ACCOUNT, "
                "AZURE_STORAGE_CONNECTION_STRING or AZURE_STORAGE_ENDPOINT."
            )

        if self.cloud == "auto":
            return AutoDetect(self.account_name, credentials)
        return _ACCOUNT_CLOUDS[self.cloud](self.account_name, credentials)


__all__ = ["ENVIRONMENT_VARIABLES", "StorageSettings"]
