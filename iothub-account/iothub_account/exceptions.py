# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Define the errors raised while setting up and tearing down an IoT Hub test account"""


class IoTHubAccountError(Exception):
    """Base class for all IoT Hub account errors"""

    def __init__(self, message, cause=None):
        """Initializer for IoTHubAccountError

        :param str message: Error message
        :param cause: Exception that caused this error (optional)
        """
        super(IoTHubAccountError, self).__init__(message)
        self.cause = cause


class AccountConfigurationError(IoTHubAccountError):
    """A required setting could not be retrieved from the environment"""

    pass


class MalformedCredentialError(IoTHubAccountError, ValueError):
    """The IoT Hub connection string does not have the expected fields and delimiters"""

    pass


class AllocationError(IoTHubAccountError):
    """Resources ran out while building a string"""

    pass


class ConnectionStringFormatError(IoTHubAccountError):
    """A device connection string could not be assembled"""

    pass


class SigningError(IoTHubAccountError):
    """A Shared Access Signature could not be built"""

    pass


class ProvisioningError(IoTHubAccountError):
    """The service rejected or failed a device creation, or a service client could not be made"""

    pass


# Never raised out of teardown, only logged
class TeardownError(IoTHubAccountError):
    """A provisioned resource could not be released"""

    pass
