""" Azure IoT Hub E2E Account Library

This library provisions the IoT Hub credentials, service clients and test devices used by end to end tests.
"""

from .account import IoTHubAccount
from .config import AccountConfig, load_config
from .connection_string import ServiceCredential, parse_service_connection_string, extract_field
from .models import AuthMethod, DeviceState, ProvisionedDevice
from .exceptions import (
    IoTHubAccountError,
    AccountConfigurationError,
    MalformedCredentialError,
    AllocationError,
    ConnectionStringFormatError,
    SigningError,
    ProvisioningError,
    TeardownError,
)

__all__ = [
    "IoTHubAccount",
    "AccountConfig",
    "load_config",
    "ServiceCredential",
    "parse_service_connection_string",
    "extract_field",
    "AuthMethod",
    "DeviceState",
    "ProvisionedDevice",
    "IoTHubAccountError",
    "AccountConfigurationError",
    "MalformedCredentialError",
    "AllocationError",
    "ConnectionStringFormatError",
    "SigningError",
    "ProvisioningError",
    "TeardownError",
]
