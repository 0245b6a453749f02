# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

"""Provides the IoT Hub REST headers, and an authentication class for use with the msrest library
"""

from msrest.authentication import Authentication
from .constant import USER_AGENT

__all__ = ["get_content_headers", "SharedAccessSignatureAuthentication"]

AUTHORIZATION = "Authorization"
USER_AGENT_HEADER = "User-Agent"
ACCEPT = "Accept"
CONTENT_TYPE = "Content-Type"
IF_MATCH = "If-Match"

JSON_CONTENT_TYPE = "application/json"
JSON_CONTENT_TYPE_UTF8 = "application/json; charset=utf-8"


def get_content_headers(authorization, if_match=False):
    """Return the headers sent with every IoT Hub registry request.

    :param str authorization: Value of the Authorization header (a SAS token)
    :param bool if_match: Add "If-Match: *" so the request applies to any etag
    :rtype: dict
    """
    headers = {
        AUTHORIZATION: authorization,
        USER_AGENT_HEADER: USER_AGENT,
        ACCEPT: JSON_CONTENT_TYPE,
        CONTENT_TYPE: JSON_CONTENT_TYPE_UTF8,
    }
    if if_match:
        headers[IF_MATCH] = "*"
    return headers


class SharedAccessSignatureAuthentication(Authentication):
    """Authentication that can be used with msrest to send the IoT Hub registry headers

    :param token_provider: Callable returning the SAS token used as the Authorization header
    :param bool if_match: Add "If-Match: *" to the session headers
    """

    def __init__(self, token_provider, if_match=False):
        super(SharedAccessSignatureAuthentication, self).__init__()
        self._token_provider = token_provider
        self._if_match = if_match

    def signed_session(self, session=None):
        """Create requests session with the registry headers applied.

        If a session object is provided, configure it directly. Otherwise,
        create a new session and return it.

        :param session: The session to configure for authentication
        :type session: requests.Session
        :rtype: requests.Session
        """
        session = super(SharedAccessSignatureAuthentication, self).signed_session(session)
        session.headers.update(get_content_headers(self._token_provider(), self._if_match))
        return session
