"""Tools library for the storage location scripts.

Provides logging setup and Azurite storage configuration shared by the
command-line tools.
"""

# bootstrap_utils exports
from tools.lib.bootstrap_utils import setup_logging

# storage_config exports
from tools.lib.storage_config import (
    AZURITE_BLOB_PORT,
    AZURITE_PORTS,
    AZURITE_QUEUE_PORT,
    AZURITE_TABLE_PORT,
    DEVSTORE_ACCOUNT_KEY,
    DEVSTORE_ACCOUNT_NAME,
    azurite_location,
    dev_blob_endpoint,
    dev_queue_endpoint,
    dev_storage_connection_string,
    dev_table_endpoint,
)

__all__ = [
    # bootstrap_utils
    "setup_logging",
    # storage_config
    "AZURITE_BLOB_PORT",
    "AZURITE_PORTS",
    "AZURITE_QUEUE_PORT",
    "AZURITE_TABLE_PORT",
    "DEVSTORE_ACCOUNT_KEY",
    "DEVSTORE_ACCOUNT_NAME",
    "azurite_location",
    "dev_storage_connection_string",
    "dev_blob_endpoint",
    "dev_queue_endpoint",
    "dev_table_endpoint",
]
