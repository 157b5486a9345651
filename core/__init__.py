"""Cloud location resolution for Azure Storage accounts."""

from core.cloud_location import (
    EMULATOR_ACCOUNT,
    EMULATOR_ACCOUNT_KEY,
    EMULATOR_CREDENTIALS,
    AutoDetect,
    ChinaCloud,
    CloudLocation,
    CustomCloud,
    Emulator,
    PublicCloud,
    USGovCloud,
    location_from_url,
)
from core.cloud_name import (
    CloudNameLookup,
    EnvironmentCloudNameLookup,
    StaticCloudNameLookup,
)
from core.connection_string import parse_connection_string
from core.credentials import StorageCredentials, anonymous, sas_token, shared_key
from core.exceptions import (
    CloudDetectionError,
    CloudLocationError,
    ConfigurationError,
    DataConversionError,
    UnknownCloudError,
    UrlParseError,
)
from core.service_type import ServiceType
from core.settings import StorageSettings

__all__ = [
    # cloud_location
    "AutoDetect",
    "ChinaCloud",
    "CloudLocation",
    "CustomCloud",
    "EMULATOR_ACCOUNT",
    "EMULATOR_ACCOUNT_KEY",
    "EMULATOR_CREDENTIALS",
    "Emulator",
    "PublicCloud",
    "USGovCloud",
    "location_from_url",
    # cloud_name
    "CloudNameLookup",
    "EnvironmentCloudNameLookup",
    "StaticCloudNameLookup",
    # connection_string
    "parse_connection_string",
    # credentials
    "StorageCredentials",
    "anonymous",
    "sas_token",
    "shared_key",
    # exceptions
    "CloudDetectionError",
    "CloudLocationError",
    "ConfigurationError",
    "DataConversionError",
    "UnknownCloudError",
    "UrlParseError",
    # service_type
    "ServiceType",
    # settings
    "StorageSettings",
]
