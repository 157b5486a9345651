import pytest
from azure.core.credentials import AzureNamedKeyCredential, AzureSasCredential

from core.cloud_location import EMULATOR_ACCOUNT, ChinaCloud, CustomCloud, Emulator, PublicCloud, USGovCloud
from core.connection_string import parse_connection_string
from core.exceptions import DataConversionError
from core.service_type import ServiceType
from tools.lib import dev_storage_connection_string


def test_development_storage_maps_to_emulator():
    location = parse_connection_string("UseDevelopmentStorage=true")

    assert location == Emulator("127.0.0.1", 10000)


def test_development_storage_proxy_uri():
    location = parse_connection_string(
        "UseDevelopmentStorage=true;DevelopmentStorageProxyUri=http://10.0.0.5:20000"
    )

    assert location == Emulator("10.0.0.5", 20000)


def test_account_key_with_default_suffix():
    location = parse_connection_string(
        "DefaultEndpointsProtocol=https;AccountName=acct;AccountKey=c2VjcmV0"
    )

    assert isinstance(location, PublicCloud)
    assert location.account == "acct"
    assert isinstance(location.credentials, AzureNamedKeyCredential)
    assert location.credentials.named_key.name == "acct"
    assert location.credentials.named_key.key == "c2VjcmV0"


@pytest.mark.parametrize(
    "suffix, location_type",
    [("core.chinacloudapi.cn", ChinaCloud), ("core.usgovcloudapi.net", USGovCloud)],
)
def test_endpoint_suffix_selects_sovereign_cloud(suffix, location_type):
    location = parse_connection_string(f"accountname=acct;accountkey=a2V5;endpointsuffix={suffix}")

    assert type(location) is location_type
    assert location.account == "acct"


def test_shared_access_signature_becomes_sas_credentials():
    location = parse_connection_string("AccountName=acct;SharedAccessSignature=?sv=2022-11-02&sig=abc=")

    assert isinstance(location.credentials, AzureSasCredential)
    assert location.credentials.signature == "sv=2022-11-02&sig=abc="


def test_account_without_secret_is_anonymous():
    assert parse_connection_string("AccountName=acct").credentials is None


def test_unknown_suffix_becomes_custom_url():
    location = parse_connection_string("AccountName=acct;EndpointSuffix=storage.example.org", ServiceType.QUEUE)

    assert isinstance(location, CustomCloud)
    assert location.url(ServiceType.QUEUE) == "https://acct.queue.storage.example.org/"


def test_explicit_endpoint_for_requested_service():
    location = parse_connection_string(
        "BlobEndpoint=https://blobs.example.com;TableEndpoint=https://tables.example.com;"
        "SharedAccessSignature=sv=1",
        "table",
    )

    assert location.url(ServiceType.TABLE) == "https://tables.example.com/"


def test_missing_service_endpoint_falls_back_to_account():
    location = parse_connection_string(
        "BlobEndpoint=https://blobs.example.com;AccountName=acct;AccountKey=a2V5", ServiceType.TABLE
    )

    assert isinstance(location, PublicCloud)
    assert location.url(ServiceType.TABLE) == "https://acct.table.core.windows.net/"


def test_missing_service_endpoint_without_account_is_error():
    with pytest.raises(DataConversionError):
        parse_connection_string("BlobEndpoint=https://blobs.example.com", ServiceType.TABLE)


@pytest.mark.parametrize(
    "service_type, port",
    [(ServiceType.BLOB, 10000), (ServiceType.QUEUE, 10001), (ServiceType.TABLE, 10002)],
)
def test_development_storage_uses_azurite_port_per_service(service_type, port):
    assert parse_connection_string("UseDevelopmentStorage=true", service_type) == Emulator("127.0.0.1", port)


def test_dev_storage_connection_string_round_trip():
    location = parse_connection_string(dev_storage_connection_string(), ServiceType.TABLE)

    assert isinstance(location, CustomCloud)
    assert location.url(ServiceType.TABLE) == f"http://127.0.0.1:10002/{EMULATOR_ACCOUNT}"
    assert location.credentials.named_key.name == EMULATOR_ACCOUNT


@pytest.mark.parametrize(
    "value",
    [
        "",
        "   ",
        "not-a-connection-string",
        "AccountKey=a2V5",
        "DefaultEndpointsProtocol=https",
        "=value",
    ],
)
def test_invalid_connection_strings(value):
    with pytest.raises(DataConversionError):
        parse_connection_string(value)
