# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module creates and deletes the device identities used by end to end tests"""

import logging
import uuid
from .device_connection_string import create_device_connection_string
from .exceptions import ProvisioningError, TeardownError
from .models import AuthMethod, DeviceState
from .constant import SAS_DEVICE_PREFIX_FMT, X509_DEVICE_PREFIX_FMT, DEVICE_STATUS_ENABLED

logger = logging.getLogger(__name__)


def _get_primary_key(device_result):
    """Copy the primary key out of the registry result. None if the result does not carry one"""
    authentication = getattr(device_result, "authentication", None)
    symmetric_key = getattr(authentication, "symmetric_key", None)
    return getattr(symmetric_key, "primary_key", None)


def generate_device_name(prefix_format):
    """Return a unique device name by substituting a new uuid into prefix_format (a "%s" format)"""
    return prefix_format % str(uuid.uuid4())


class DeviceProvisioner(object):
    """Provisions test devices on an IoT Hub through a registry manager.

    :param registry_manager: The registry manager used to create and delete devices
    :type registry_manager: :class:`azure.iot.hub.IoTHubRegistryManager`
    :param str host_name: The IoT Hub host name, used in device connection strings
    :param str x509_certificate: Certificate given to X509 devices
    :param str x509_private_key: Private key given to X509 devices
    :param str x509_thumbprint: Thumbprint registered for X509 devices
    """

    def __init__(
        self, registry_manager, host_name, x509_certificate, x509_private_key, x509_thumbprint
    ):
        self._registry_manager = registry_manager
        self._host_name = host_name
        self._x509_certificate = x509_certificate
        self._x509_private_key = x509_private_key
        self._x509_thumbprint = x509_thumbprint

    def provision(self, device):
        """Create the device on IoT Hub and fill in its identity and connection string.

        device.device_id is only set once IoT Hub has created the device. If building the
        connection string fails after that, the device is NOT deleted here: it stays in the
        CREATED state, and it is up to the owner of the record to deprovision it.

        :param device: An unprovisioned device record. Updated in place.
        :type device: :class:`iothub_account.models.ProvisionedDevice`
        :raises: :class:`ProvisioningError` if IoT Hub does not create the device
        :raises: :class:`ConnectionStringFormatError` or :class:`AllocationError` if the
            connection string cannot be built
        """
        if device.auth_method is AuthMethod.SAS:
            device_id = generate_device_name(SAS_DEVICE_PREFIX_FMT)
        else:
            device_id = generate_device_name(X509_DEVICE_PREFIX_FMT)
        device.state = DeviceState.NAME_GENERATED

        try:
            if device.auth_method is AuthMethod.SAS:
                result = self._registry_manager.create_device_with_sas(
                    device_id, None, None, DEVICE_STATUS_ENABLED
                )
            else:
                self._registry_manager.create_device_with_x509(
                    device_id, self._x509_thumbprint, None, DEVICE_STATUS_ENABLED
                )
        except Exception as e:
            logger.error("Creating {} device {} failed".format(device.auth_method.name, device_id))
            raise ProvisioningError(
                "Unable to create {} device on IoT Hub".format(device.auth_method.name), e
            ) from e

        device.device_id = device_id
        if device.auth_method is AuthMethod.SAS:
            device.primary_authentication = _get_primary_key(result)
        else:
            device.primary_authentication = self._x509_private_key
            device.certificate = self._x509_certificate
        device.state = DeviceState.CREATED
        logger.info("Created Device {}.".format(device_id))

        device.connection_string = create_device_connection_string(self._host_name, device)
        device.state = DeviceState.CONNECTION_STRING_BUILT
        return device

    def deprovision(self, device):
        """Delete the device from IoT Hub. Best effort: failures are logged, never raised.

        :returns: True if the device was deleted, False if it failed or there was nothing to delete
        """
        if device.device_id is None:
            return False
        try:
            self._registry_manager.delete_device(device.device_id)
        except Exception as e:
            error = TeardownError(
                "Unable to delete {} device {}".format(device.auth_method.name, device.device_id),
                e,
            )
            logger.error(str(error), exc_info=True)
            return False
        logger.info("Deleted Device {}.".format(device.device_id))
        device.state = DeviceState.DEPROVISIONED
        return True
