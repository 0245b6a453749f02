# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module builds the connection strings for provisioned test devices"""

from .connection_string import (
    CS_DELIMITER,
    CS_VAL_SEPARATOR,
    HOST_NAME,
    DEVICE_ID,
    SHARED_ACCESS_KEY,
    X509,
)
from .exceptions import AllocationError, ConnectionStringFormatError
from .models import AuthMethod

CONN_HOST_PART = HOST_NAME + CS_VAL_SEPARATOR
CONN_DEVICE_PART = CS_DELIMITER + DEVICE_ID + CS_VAL_SEPARATOR
CONN_KEY_PART = CS_DELIMITER + SHARED_ACCESS_KEY + CS_VAL_SEPARATOR
CONN_X509_PART = CS_DELIMITER + X509 + CS_VAL_SEPARATOR + "true"


def _concatenate(parts):
    return "".join(parts)


def _join_parts(parts):
    """Concatenate parts once they are all known to be non-empty strings"""
    for part in parts:
        if not isinstance(part, str) or not part:
            raise ConnectionStringFormatError(
                "Invalid Connection String part - Must be a non-empty str, got {!r}".format(
                    type(part).__name__
                )
            )
    try:
        return _concatenate(parts)
    except MemoryError as e:
        raise AllocationError("Unable to allocate the device connection string", e) from e


def create_sas_connection_string(host_name, device_id, primary_key):
    """Return HostName=<host_name>;DeviceId=<device_id>;SharedAccessKey=<primary_key>

    :raises: :class:`ConnectionStringFormatError` if any part is missing
    :raises: :class:`AllocationError` if the string cannot be allocated
    """
    return _join_parts(
        [CONN_HOST_PART, host_name, CONN_DEVICE_PART, device_id, CONN_KEY_PART, primary_key]
    )


def create_x509_connection_string(host_name, device_id):
    """Return HostName=<host_name>;DeviceId=<device_id>;x509=true

    :raises: :class:`ConnectionStringFormatError` if any part is missing
    :raises: :class:`AllocationError` if the string cannot be allocated
    """
    return _join_parts([CONN_HOST_PART, host_name, CONN_DEVICE_PART, device_id, CONN_X509_PART])


def create_device_connection_string(host_name, device):
    """Build the connection string for a device, according to its authentication method.

    :param str host_name: The IoT Hub host name
    :param device: The device to build a connection string for
    :type device: :class:`iothub_account.models.ProvisionedDevice`
    :rtype: str
    """
    if device.auth_method is AuthMethod.SAS:
        return create_sas_connection_string(
            host_name, device.device_id, device.primary_authentication
        )
    elif device.auth_method is AuthMethod.X509:
        return create_x509_connection_string(host_name, device.device_id)
    else:
        raise ConnectionStringFormatError(
            "Unsupported authentication method: {}".format(device.auth_method)
        )
