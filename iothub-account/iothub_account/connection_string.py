# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for working with IoT Hub Connection Strings"""

import re
from .exceptions import MalformedCredentialError

__all__ = ["ServiceCredential", "parse_service_connection_string", "iter_fields", "extract_field"]

CS_DELIMITER = ";"
CS_VAL_SEPARATOR = "="
HOST_LABEL_SEPARATOR = "."

HOST_NAME = "HostName"
SHARED_ACCESS_KEY_NAME = "SharedAccessKeyName"
SHARED_ACCESS_KEY = "SharedAccessKey"
DEVICE_ID = "DeviceId"
X509 = "x509"

# Only the first "." in the host is the hub/suffix boundary. The service always issues
# "<hub>.azure-devices.net" shaped names, so custom domains keep their dots in the suffix.
_service_connection_string_pattern = re.compile(
    r"HostName=(?P<hub_name>[^.;\s]+)\.(?P<hub_suffix>[^;\s]+)"
    r";SharedAccessKeyName=(?P<key_name>[^;\s]+)"
    r";SharedAccessKey=(?P<shared_key>[^;\s]+)"
)


class ServiceCredential(object):
    """The fields of an IoT Hub service (shared access policy) connection string.

    All attributes are read only.

    Data Attributes:
    hub_name (str): Host label before the first "."
    hub_suffix (str): Remainder of the host after the first "."
    host_name (str): Full host name, always hub_name + "." + hub_suffix
    key_name (str): Shared Access Key Name
    shared_key (str): Shared Access Key (base64 encoded)
    """

    def __init__(self, hub_name, hub_suffix, key_name, shared_key):
        self._hub_name = hub_name
        self._hub_suffix = hub_suffix
        self._key_name = key_name
        self._shared_key = shared_key

    def __repr__(self):
        # The key is a secret, leave it out
        return "ServiceCredential(host_name={!r}, key_name={!r})".format(
            self.host_name, self.key_name
        )

    @property
    def hub_name(self):
        return self._hub_name

    @property
    def hub_suffix(self):
        return self._hub_suffix

    @property
    def host_name(self):
        return self._hub_name + HOST_LABEL_SEPARATOR + self._hub_suffix

    @property
    def key_name(self):
        return self._key_name

    @property
    def shared_key(self):
        return self._shared_key


def parse_service_connection_string(connection_string):
    """Decompose an IoT Hub service connection string.

    The string must have exactly the shape
    HostName=<hub>.<suffix>;SharedAccessKeyName=<keyName>;SharedAccessKey=<key>
    Surrounding whitespace is ignored, whitespace inside a field is not allowed.

    :param str connection_string: The IoT Hub connection string
    :returns: The parsed credential
    :rtype: :class:`ServiceCredential`
    :raises: :class:`MalformedCredentialError` if the string does not have the expected shape
    """
    if not isinstance(connection_string, str):
        raise MalformedCredentialError("Invalid Connection String - Must be of type str")
    match = _service_connection_string_pattern.fullmatch(connection_string.strip())
    if not match:
        raise MalformedCredentialError(
            "Invalid Connection String - Expected HostName=<hub>.<suffix>;"
            "SharedAccessKeyName=<keyName>;SharedAccessKey=<key>"
        )
    return ServiceCredential(
        hub_name=match.group("hub_name"),
        hub_suffix=match.group("hub_suffix"),
        key_name=match.group("key_name"),
        shared_key=match.group("shared_key"),
    )


def iter_fields(connection_string):
    """Yield the (name, value) pairs of a connection string in order.

    Tokens are taken at "=" then at ";" alternately, so a value may itself contain "="
    (e.g. base64 padding). Scanning stops silently at the first malformed boundary.
    This does not validate the connection string.
    """
    if not isinstance(connection_string, str):
        return
    position = 0
    length = len(connection_string)
    while position < length:
        separator = connection_string.find(CS_VAL_SEPARATOR, position)
        if separator == -1:
            return
        name = connection_string[position:separator]

        value_start = separator + 1
        if value_start >= length:
            return
        delimiter = connection_string.find(CS_DELIMITER, value_start)
        if delimiter == -1:
            delimiter = length
        yield name, connection_string[value_start:delimiter]
        position = delimiter + 1


def extract_field(connection_string, field_name):
    """Return the value of the first field called field_name, or "" if there is none.

    :param str connection_string: A ";" delimited connection string
    :param str field_name: The field to look for (e.g. "SharedAccessKey")
    :rtype: str
    """
    for name, value in iter_fields(connection_string):
        if name == field_name:
            return value
    return ""
