# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the IoT Hub account context shared by end to end test suites"""

import logging
from azure.iot.hub import IoTHubRegistryManager
from azure.iot.hub.iothub_amqp_client import IoTHubAmqpClientSharedAccessKeyAuth
from . import config
from .auth import get_content_headers, SharedAccessSignatureAuthentication
from .connection_string import parse_service_connection_string, extract_field, SHARED_ACCESS_KEY
from .device_provisioner import DeviceProvisioner
from .exceptions import ProvisioningError, SigningError, TeardownError
from .models import AuthMethod, ProvisionedDevice
from .token_cache import TokenCache

logger = logging.getLogger(__name__)


class IoTHubAccount(object):
    """Credentials, service clients and provisioned devices for an IoT Hub under test.

    Creating an account parses the IoT Hub connection string, opens the messaging and
    registry clients, and provisions one SAS device and one X509 device. If any of that
    fails, everything already acquired is released and the error is raised. There are no
    partially initialized accounts.

    An account is meant for a single thread. Tests running in parallel threads should each
    create their own account.

    Users should not call the initializer directly. Rather, they should use the create()
    factory method.
    """

    def __init__(self, account_config):
        """Initializer for an IoT Hub account.

        :param account_config: The account settings
        :type account_config: :class:`iothub_account.config.AccountConfig`

        :raises: :class:`MalformedCredentialError` if the IoT Hub connection string is invalid
        :raises: :class:`ProvisioningError` if a service client or a device cannot be created
        """
        self._config = account_config
        self._registry_manager = None
        self._messaging_client = None
        self._sas_device = ProvisionedDevice(AuthMethod.SAS)
        self._x509_device = ProvisionedDevice(AuthMethod.X509)

        self._credential = parse_service_connection_string(account_config.iothub_connection_string)
        self._token_cache = TokenCache(self._credential)

        try:
            self._initialize()
        except Exception:
            logger.error("Failure initializing the IoT Hub account, releasing resources")
            self.close()
            raise

    @classmethod
    def create(cls, environ=None):
        """Classmethod initializer for an IoT Hub account.
        Reads the account settings from the environment.

        :param environ: Mapping to read the settings from. Defaults to os.environ

        :raises: :class:`AccountConfigurationError` if a required setting is missing
        :rtype: :class:`IoTHubAccount`
        """
        return cls(config.load_config(environ))

    def _initialize(self):
        credential = self._credential
        try:
            self._messaging_client = IoTHubAmqpClientSharedAccessKeyAuth(
                credential.host_name, credential.key_name, credential.shared_key
            )
        except Exception as e:
            raise ProvisioningError("Unable to create the IoT Hub messaging client", e) from e

        try:
            self._registry_manager = IoTHubRegistryManager.from_connection_string(
                self._config.iothub_connection_string
            )
        except Exception as e:
            raise ProvisioningError("Unable to create the IoT Hub registry manager", e) from e

        provisioner = self._get_provisioner()
        provisioner.provision(self._sas_device)
        provisioner.provision(self._x509_device)

    def _get_provisioner(self):
        return DeviceProvisioner(
            self._registry_manager,
            self._credential.host_name,
            self._config.x509_certificate,
            self._config.x509_private_key,
            self._config.x509_thumbprint,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """Delete the provisioned devices and release the service clients.

        Failures are logged and do not stop the rest of the cleanup. Safe to call more than once.
        """
        if self._registry_manager is not None:
            provisioner = self._get_provisioner()
            provisioner.deprovision(self._sas_device)
            provisioner.deprovision(self._x509_device)
            self._registry_manager = None

        if self._messaging_client is not None:
            try:
                self._messaging_client.disconnect_sync()
            except Exception as e:
                error = TeardownError("Unable to disconnect the IoT Hub messaging client", e)
                logger.error(str(error), exc_info=True)
            self._messaging_client = None

    @property
    def iothub_connection_string(self):
        return self._config.iothub_connection_string

    @property
    def eventhub_connection_string(self):
        return self._config.eventhub_connection_string

    @property
    def iothub_name(self):
        return self._credential.hub_name

    @property
    def iothub_suffix(self):
        return self._credential.hub_suffix

    @property
    def iothub_hostname(self):
        return self._credential.host_name

    @property
    def sas_device(self):
        """:rtype: :class:`iothub_account.models.ProvisionedDevice`"""
        return self._sas_device

    @property
    def x509_device(self):
        """:rtype: :class:`iothub_account.models.ProvisionedDevice`"""
        return self._x509_device

    @property
    def messaging_client(self):
        """Client for sending cloud to device messages. None once the account is closed."""
        return self._messaging_client

    def get_eventhub_listen_name(self):
        """Return IOTHUB_EVENTHUB_LISTEN_NAME, or the IoT Hub name if it is not set"""
        return config.get_listen_name(self._config.environ, self.iothub_name)

    def get_eventhub_consumer_group(self):
        """Return IOTHUB_EVENTHUB_CONSUMER_GROUP, or "$Default" if it is not set"""
        return config.get_consumer_group(self._config.environ)

    def get_partition_count(self):
        """Return IOTHUB_PARTITION_COUNT, or 16 if it is not set"""
        return config.get_partition_count(self._config.environ)

    def get_eventhub_access_key(self):
        """Return the SharedAccessKey of the IoT Hub connection string, or "" if there is none"""
        return extract_field(self._config.iothub_connection_string, SHARED_ACCESS_KEY)

    def get_shared_access_signature(self):
        """Return the IoT Hub service SAS token, or None if it cannot be built.

        The token is built on the first call, then the same string is returned for the
        lifetime of the account. It is never refreshed, even after it expires.
        """
        try:
            return self._token_cache.get_signed_token()
        except SigningError:
            logger.warning("Unable to build the IoT Hub Shared Access Signature", exc_info=True)
            return None

    def get_content_headers(self, if_match=False):
        """Return the IoT Hub registry REST headers, authorized with the account's SAS token

        :param bool if_match: Add "If-Match: *"
        :rtype: dict
        """
        return get_content_headers(self.get_shared_access_signature() or "", if_match)

    def get_signed_session(self, if_match=False, session=None):
        """Return a requests session carrying the IoT Hub registry REST headers

        :param bool if_match: Add "If-Match: *"
        :param session: An existing session to configure. A new one is created if not given
        :type session: requests.Session
        :rtype: requests.Session
        """
        auth = SharedAccessSignatureAuthentication(
            lambda: self.get_shared_access_signature() or "", if_match
        )
        return auth.signed_session(session)
