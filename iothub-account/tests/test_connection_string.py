# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest
import logging
from iothub_account.connection_string import (
    ServiceCredential,
    parse_service_connection_string,
    iter_fields,
    extract_field,
)
from iothub_account.exceptions import MalformedCredentialError

logging.basicConfig(level=logging.DEBUG)


@pytest.mark.describe("parse_service_connection_string()")
class TestParseServiceConnectionString(object):
    @pytest.mark.it("Returns a ServiceCredential containing the values of each field")
    @pytest.mark.parametrize(
        "hub_name, hub_suffix, key_name, shared_key",
        [
            pytest.param("myhub", "azure-devices.net", "iothubowner", "abc123==", id="Public cloud"),
            pytest.param("h", "s", "k", "v", id="Single characters"),
            pytest.param(
                "myhub", "azure-devices.cn", "service", "Zm9vYmFy", id="Sovereign cloud suffix"
            ),
        ],
    )
    def test_parses_fields(self, hub_name, hub_suffix, key_name, shared_key):
        connection_string = "HostName={}.{};SharedAccessKeyName={};SharedAccessKey={}".format(
            hub_name, hub_suffix, key_name, shared_key
        )
        credential = parse_service_connection_string(connection_string)

        assert isinstance(credential, ServiceCredential)
        assert credential.hub_name == hub_name
        assert credential.hub_suffix == hub_suffix
        assert credential.key_name == key_name
        assert credential.shared_key == shared_key
        assert credential.host_name == hub_name + "." + hub_suffix

    @pytest.mark.it("Splits the hub name from the suffix at the first '.' in the host name only")
    def test_first_dot_boundary(self):
        credential = parse_service_connection_string(
            "HostName=myhub.custom.domain.net;SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy"
        )
        assert credential.hub_name == "myhub"
        assert credential.hub_suffix == "custom.domain.net"
        assert credential.host_name == "myhub.custom.domain.net"

    @pytest.mark.it("Keeps '=' characters that are part of the shared access key")
    def test_key_padding(self):
        credential = parse_service_connection_string(
            "HostName=myhub.azure-devices.net;SharedAccessKeyName=iothubowner;SharedAccessKey=abc123=="
        )
        assert credential.shared_key == "abc123=="

    @pytest.mark.it("Ignores whitespace surrounding the connection string")
    @pytest.mark.parametrize(
        "connection_string",
        [
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy\n",
                id="Trailing newline",
            ),
            pytest.param(
                "  HostName=myhub.azure-devices.net;SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy \t",
                id="Leading and trailing blanks",
            ),
        ],
    )
    def test_surrounding_whitespace(self, connection_string):
        credential = parse_service_connection_string(connection_string)
        assert credential.hub_name == "myhub"
        assert credential.key_name == "owner"
        assert credential.shared_key == "Zm9vYmFy"

    @pytest.mark.it("Raises a MalformedCredentialError on a malformed connection string")
    @pytest.mark.parametrize(
        "connection_string",
        [
            pytest.param("", id="Empty string"),
            pytest.param("garbage", id="Not a connection string"),
            pytest.param(
                "HostName=myhub;SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy",
                id="No '.' in host name",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy",
                id="Missing ';'",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKey=Zm9vYmFy",
                id="Missing SharedAccessKeyName",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKeyName=owner",
                id="Missing SharedAccessKey",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKeyName=owner;SharedAccessKey=",
                id="Empty SharedAccessKey",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKeyName=;SharedAccessKey=Zm9vYmFy",
                id="Empty SharedAccessKeyName",
            ),
            pytest.param(
                "HostName=.azure-devices.net;SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy",
                id="Empty hub name",
            ),
            pytest.param(
                "HostName=myhub.;SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy",
                id="Empty hub suffix",
            ),
            pytest.param(
                "SharedAccessKeyName=owner;HostName=myhub.azure-devices.net;SharedAccessKey=Zm9vYmFy",
                id="Fields out of order",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;DeviceId=my-device;SharedAccessKey=Zm9vYmFy",
                id="Device connection string",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKeyName=owner;SharedAccessKey=Zm9vYmFy;DeviceId=d",
                id="Trailing extra field",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKeyName=owner;SharedAccessKey=Zm9v YmFy",
                id="Whitespace inside SharedAccessKey",
            ),
            pytest.param(
                "HostName=myhub.azure-devices.net;SharedAccessKeyName=iothub owner;SharedAccessKey=Zm9vYmFy",
                id="Whitespace inside SharedAccessKeyName",
            ),
        ],
    )
    def test_raises_on_malformed(self, connection_string):
        with pytest.raises(MalformedCredentialError):
            parse_service_connection_string(connection_string)

    @pytest.mark.it("Raises a MalformedCredentialError if the connection string is not a str")
    @pytest.mark.parametrize(
        "connection_string",
        [pytest.param(None, id="None"), pytest.param(b"HostName=a.b", id="bytes")],
    )
    def test_raises_on_type(self, connection_string):
        with pytest.raises(MalformedCredentialError):
            parse_service_connection_string(connection_string)

    @pytest.mark.it("Raises an error that can also be caught as a ValueError")
    def test_value_error(self):
        with pytest.raises(ValueError):
            parse_service_connection_string("garbage")


@pytest.mark.describe("ServiceCredential")
class TestServiceCredential(object):
    @pytest.mark.it("Maintains all fields as read-only properties")
    @pytest.mark.parametrize(
        "attribute", ["hub_name", "hub_suffix", "host_name", "key_name", "shared_key"]
    )
    def test_read_only(self, credential, attribute):
        with pytest.raises(AttributeError):
            setattr(credential, attribute, "new_value")

    @pytest.mark.it("Does not include the shared access key in its representation")
    def test_repr_hides_key(self, credential):
        assert credential.shared_key not in repr(credential)
        assert credential.host_name in repr(credential)


@pytest.mark.describe("iter_fields()")
class TestIterFields(object):
    @pytest.mark.it("Yields each (name, value) pair in order")
    def test_pairs_in_order(self):
        pairs = list(iter_fields("HostName=a;SharedAccessKeyName=b;SharedAccessKey=c"))
        assert pairs == [("HostName", "a"), ("SharedAccessKeyName", "b"), ("SharedAccessKey", "c")]

    @pytest.mark.it("Keeps '=' characters inside a value")
    def test_equals_in_value(self):
        pairs = list(iter_fields("SharedAccessKey=abc123==;EntityPath=e"))
        assert pairs == [("SharedAccessKey", "abc123=="), ("EntityPath", "e")]

    @pytest.mark.it("Takes everything up to the next '=' as the name when a token has no '='")
    def test_token_without_separator(self):
        pairs = list(iter_fields("HostName=a;garbage;SharedAccessKey=c"))
        assert pairs == [("HostName", "a"), ("garbage;SharedAccessKey", "c")]

    @pytest.mark.it("Stops when a trailing name has no value")
    def test_stops_on_empty_trailing_value(self):
        assert list(iter_fields("HostName=a;SharedAccessKey=")) == [("HostName", "a")]

    @pytest.mark.it("Yields nothing for an input that is not a str")
    def test_not_a_string(self):
        assert list(iter_fields(None)) == []


@pytest.mark.describe("extract_field()")
class TestExtractField(object):
    @pytest.mark.it("Returns the value of the requested field")
    @pytest.mark.parametrize(
        "field_name, expected_value",
        [
            pytest.param("HostName", "a", id="First field"),
            pytest.param("SharedAccessKeyName", "b", id="Middle field"),
            pytest.param("SharedAccessKey", "c", id="Last field"),
        ],
    )
    def test_returns_value(self, field_name, expected_value):
        connection_string = "HostName=a;SharedAccessKeyName=b;SharedAccessKey=c"
        assert extract_field(connection_string, field_name) == expected_value

    @pytest.mark.it("Matches the field name exactly (SharedAccessKey does not match SharedAccessKeyName)")
    def test_exact_name(self):
        assert extract_field("SharedAccessKeyName=b;SharedAccessKey=c", "SharedAccessKey") == "c"

    @pytest.mark.it("Returns the first value when a field appears more than once")
    def test_first_match(self):
        assert extract_field("SharedAccessKey=first;SharedAccessKey=second", "SharedAccessKey") == (
            "first"
        )

    @pytest.mark.it("Returns an empty string when the field is absent")
    def test_absent(self):
        assert extract_field("HostName=a;SharedAccessKeyName=b", "SharedAccessKey") == ""

    @pytest.mark.it("Returns an empty string when the input is malformed before the field")
    @pytest.mark.parametrize(
        "connection_string",
        [
            pytest.param("", id="Empty string"),
            pytest.param("garbage", id="No separators"),
            pytest.param("HostName=a;SharedAccessKey=", id="Empty value"),
            pytest.param(None, id="None"),
        ],
    )
    def test_malformed(self, connection_string):
        assert extract_field(connection_string, "SharedAccessKey") == ""
