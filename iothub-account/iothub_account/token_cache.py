# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the memoized service Shared Access Signature for a test account"""

import logging
from azure.iot.hub.sastoken import SasToken, SasTokenError
from .exceptions import SigningError
from .constant import DEFAULT_SAS_TTL

logger = logging.getLogger(__name__)


class TokenCache(object):
    """Lazily builds, then keeps, one signed token for a service credential.

    The token is never refreshed, even once it has expired. Tests rely on getting the
    same token string back on every call, so callers must not assume it is still valid.

    Not safe for concurrent use. Each account context owns its own cache.
    """

    def __init__(self, credential, ttl=DEFAULT_SAS_TTL):
        """
        :param credential: The parsed IoT Hub service credential
        :type credential: :class:`iothub_account.connection_string.ServiceCredential`
        :param int ttl: Time to live for the token, in seconds (default 3600)
        """
        self._credential = credential
        self._ttl = ttl
        self._sastoken = None
        self._token_str = None

    @property
    def expiry_time(self):
        """Expiry time of the cached token, or None if no token has been built yet"""
        if self._sastoken is None:
            return None
        return self._sastoken.expiry_time

    def get_signed_token(self):
        """Return the cached token string, building it on the first call.

        :rtype: str
        :raises: SigningError if the token cannot be built. Nothing is cached in that case.
        """
        if self._token_str is not None:
            return self._token_str

        try:
            sastoken = SasToken(
                uri=self._credential.host_name,
                key=self._credential.shared_key,
                key_name=self._credential.key_name,
                ttl=self._ttl,
            )
        except SasTokenError as e:
            raise SigningError("Unable to sign token with shared access key", e) from e

        logger.debug("Built SasToken expiring at {}".format(sastoken.expiry_time))
        self._sastoken = sastoken
        self._token_str = str(sastoken)
        return self._token_str
