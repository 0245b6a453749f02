# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module reads the settings of an IoT Hub test account from the environment"""

import logging
import os
from .exceptions import AccountConfigurationError
from .constant import DEFAULT_CONSUMER_GROUP, DEFAULT_PARTITION_COUNT

logger = logging.getLogger(__name__)

IOTHUB_CONNECTION_STRING = "IOTHUB_CONNECTION_STRING"
IOTHUB_EVENTHUB_CONNECTION_STRING = "IOTHUB_EVENTHUB_CONNECTION_STRING"
IOTHUB_E2E_X509_CERT = "IOTHUB_E2E_X509_CERT"
IOTHUB_E2E_X509_PRIVATE_KEY = "IOTHUB_E2E_X509_PRIVATE_KEY"
IOTHUB_E2E_X509_THUMBPRINT = "IOTHUB_E2E_X509_THUMBPRINT"
IOTHUB_EVENTHUB_LISTEN_NAME = "IOTHUB_EVENTHUB_LISTEN_NAME"
IOTHUB_EVENTHUB_CONSUMER_GROUP = "IOTHUB_EVENTHUB_CONSUMER_GROUP"
IOTHUB_PARTITION_COUNT = "IOTHUB_PARTITION_COUNT"

_required_settings = [
    (IOTHUB_CONNECTION_STRING, "IoT Hub connection string"),
    (IOTHUB_EVENTHUB_CONNECTION_STRING, "Event Hub connection string"),
    (IOTHUB_E2E_X509_CERT, "x509 certificate"),
    (IOTHUB_E2E_X509_PRIVATE_KEY, "x509 private key"),
    (IOTHUB_E2E_X509_THUMBPRINT, "x509 certificate thumbprint"),
]


class AccountConfig(object):
    """Required settings for an IoT Hub test account

    :ivar str iothub_connection_string: IoT Hub service connection string
    :ivar str eventhub_connection_string: Event Hub compatible endpoint connection string
    :ivar str x509_certificate: Certificate of the X509 test device
    :ivar str x509_private_key: Private key of the X509 test device
    :ivar str x509_thumbprint: Thumbprint of the X509 test device certificate
    """

    def __init__(
        self,
        iothub_connection_string,
        eventhub_connection_string,
        x509_certificate,
        x509_private_key,
        x509_thumbprint,
        environ=None,
    ):
        self.iothub_connection_string = iothub_connection_string
        self.eventhub_connection_string = eventhub_connection_string
        self.x509_certificate = x509_certificate
        self.x509_private_key = x509_private_key
        self.x509_thumbprint = x509_thumbprint
        # Optional settings are looked up here each time they are requested
        self.environ = environ if environ is not None else os.environ


def load_config(environ=None):
    """Read the required account settings.

    :param environ: Mapping to read from. Defaults to os.environ
    :rtype: :class:`AccountConfig`
    :raises: :class:`AccountConfigurationError` if a required setting is missing
    """
    if environ is None:
        environ = os.environ

    values = []
    for name, description in _required_settings:
        value = environ.get(name)
        if value is None:
            logger.error("Failure retrieving {} from the environment.".format(description))
            raise AccountConfigurationError(
                "Required environment variable {} is not set".format(name)
            )
        values.append(value)

    return AccountConfig(*values, environ=environ)


def get_listen_name(environ, default):
    return environ.get(IOTHUB_EVENTHUB_LISTEN_NAME, default)


def get_consumer_group(environ):
    return environ.get(IOTHUB_EVENTHUB_CONSUMER_GROUP, DEFAULT_CONSUMER_GROUP)


def get_partition_count(environ):
    """Return the partition count setting, or the default if it is unset or not an integer"""
    value = environ.get(IOTHUB_PARTITION_COUNT)
    if value is None:
        return DEFAULT_PARTITION_COUNT
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "{}={!r} is not an integer, using default of {}".format(
                IOTHUB_PARTITION_COUNT, value, DEFAULT_PARTITION_COUNT
            )
        )
        return DEFAULT_PARTITION_COUNT
