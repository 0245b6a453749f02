# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the records describing devices provisioned for a test account"""

from enum import Enum


class AuthMethod(Enum):
    """How a provisioned device authenticates with IoT Hub"""

    SAS = "sas"
    X509 = "x509"


class DeviceState(Enum):
    UNPROVISIONED = "unprovisioned"
    NAME_GENERATED = "name_generated"
    CREATED = "created"
    CONNECTION_STRING_BUILT = "connection_string_built"
    DEPROVISIONED = "deprovisioned"


class ProvisionedDevice(object):
    """A device identity created on IoT Hub for the duration of a test run.

    :ivar device_id: The name (Id) of the device. None until IoT Hub has created the device.
    :type device_id: str
    :ivar auth_method: How the device authenticates
    :type auth_method: :class:`AuthMethod`
    :ivar primary_authentication: The device's primary key (SAS), or the private key (X509)
    :type primary_authentication: str
    :ivar connection_string: The device connection string
    :type connection_string: str
    :ivar certificate: The device certificate (X509 only)
    :type certificate: str
    :ivar state: Where the device is in its provisioning lifecycle
    :type state: :class:`DeviceState`
    """

    def __init__(self, auth_method):
        self.auth_method = auth_method
        self.device_id = None
        self.primary_authentication = None
        self.connection_string = None
        self.certificate = None
        self.state = DeviceState.UNPROVISIONED

    def __repr__(self):
        return "ProvisionedDevice(device_id={!r}, auth_method={}, state={})".format(
            self.device_id, self.auth_method.name, self.state.name
        )

    @property
    def is_provisioned(self):
        return self.state is DeviceState.CONNECTION_STRING_BUILT
