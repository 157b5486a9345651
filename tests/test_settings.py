import pytest
from azure.core.credentials import AzureNamedKeyCredential, AzureSasCredential

from core.cloud_location import AutoDetect, ChinaCloud, CustomCloud, Emulator, PublicCloud, USGovCloud
from core.exceptions import ConfigurationError
from core.service_type import ServiceType
from core.settings import StorageSettings


def test_empty_environment_requires_account():
    settings = StorageSettings.from_env({})

    assert settings.cloud == "auto"
    with pytest.raises(ConfigurationError):
        settings.to_location()


def test_account_defaults_to_auto_detect():
    location = StorageSettings.from_env({"AZURE_STORAGE_ACCOUNT": "acct"}).to_location()

    assert isinstance(location, AutoDetect)
    assert location.account == "acct"
    assert location.credentials is None


@pytest.mark.parametrize(
    "cloud, location_type",
    [("public", PublicCloud), ("China", ChinaCloud), ("USGOV", USGovCloud)],
)
def test_explicit_cloud_with_shared_key(cloud, location_type):
    settings = StorageSettings.from_env(
        {"AZURE_STORAGE_ACCOUNT": "acct", "AZURE_STORAGE_KEY": "a2V5", "AZURE_STORAGE_CLOUD": cloud}
    )

    location = settings.to_location()

    assert type(location) is location_type
    assert isinstance(location.credentials, AzureNamedKeyCredential)
    assert location.credentials.named_key == ("acct", "a2V5")


def test_sas_token_preferred_over_key():
    settings = StorageSettings.from_env(
        {
            "AZURE_STORAGE_ACCOUNT": "acct",
            "AZURE_STORAGE_KEY": "a2V5",
            "AZURE_STORAGE_SAS_TOKEN": "?sv=1&sig=x",
            "AZURE_STORAGE_CLOUD": "public",
        }
    )

    credentials = settings.to_location().credentials

    assert isinstance(credentials, AzureSasCredential)
    assert credentials.signature == "sv=1&sig=x"


def test_unknown_cloud_is_configuration_error():
    with pytest.raises(ConfigurationError):
        StorageSettings.from_env({"AZURE_STORAGE_CLOUD": "AzureGermanCloud"})


def test_emulator_flag_wins():
    settings = StorageSettings.from_env(
        {
            "AZURE_STORAGE_USE_EMULATOR": "true",
            "AZURE_STORAGE_EMULATOR_PORT": "10002",
            "AZURE_STORAGE_ACCOUNT": "acct",
        }
    )

    assert settings.to_location() == Emulator("127.0.0.1", 10002)


def test_emulator_without_port_uses_service_port():
    settings = StorageSettings.from_env({"AZURE_STORAGE_USE_EMULATOR": "1"})

    assert settings.to_location(ServiceType.TABLE) == Emulator("127.0.0.1", 10002)
    assert settings.to_location("queue") == Emulator("127.0.0.1", 10001)
    assert settings.to_location() == Emulator("127.0.0.1", 10000)


def test_functions_storage_setting_for_table_service():
    settings = StorageSettings.from_env({"AzureWebJobsStorage": "UseDevelopmentStorage=true"})

    assert settings.to_location(ServiceType.TABLE) == Emulator("127.0.0.1", 10002)


def test_invalid_emulator_port_is_configuration_error():
    with pytest.raises(ConfigurationError):
        StorageSettings.from_env({"AZURE_STORAGE_EMULATOR_PORT": "not-a-port"})


def test_functions_storage_setting_is_used_as_connection_string():
    location = StorageSettings.from_env({"AzureWebJobsStorage": "UseDevelopmentStorage=true"}).to_location()

    assert location == Emulator("127.0.0.1", 10000)


def test_storage_connection_string_precedes_functions_setting():
    settings = StorageSettings.from_env(
        {
            "AZURE_STORAGE_CONNECTION_STRING": "AccountName=acct;EndpointSuffix=core.chinacloudapi.cn",
            "AzureWebJobsStorage": "UseDevelopmentStorage=true",
        }
    )

    assert isinstance(settings.to_location(), ChinaCloud)


def test_endpoint_becomes_custom_location():
    settings = StorageSettings.from_env(
        {"AZURE_STORAGE_ENDPOINT": "https://storage.example.com", "AZURE_STORAGE_SAS_TOKEN": "sv=1"}
    )

    location = settings.to_location()

    assert isinstance(location, CustomCloud)
    assert location.url(ServiceType.BLOB) == "https://storage.example.com/"


def test_key_without_account_is_configuration_error():
    settings = StorageSettings.from_env(
        {"AZURE_STORAGE_ENDPOINT": "https://storage.example.com", "AZURE_STORAGE_KEY": "a2V5"}
    )

    with pytest.raises(ConfigurationError):
        settings.to_location()


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("AZURE_STORAGE_ACCOUNT", "fromenv")
    monkeypatch.setenv("AZURE_STORAGE_CLOUD", "public")
    for name in ("AZURE_STORAGE_CONNECTION_STRING", "AzureWebJobsStorage", "AZURE_STORAGE_USE_EMULATOR",
                 "AZURE_STORAGE_ENDPOINT", "AZURE_STORAGE_KEY", "AZURE_STORAGE_SAS_TOKEN"):
        monkeypatch.delenv(name, raising=False)

    assert StorageSettings.from_env().to_location() == PublicCloud("fromenv")
