# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest


# These fixtures are shared
from .common_fixtures import (  # noqa: F401
    fake_environ,
    account_config,
    credential,
    mock_registry_manager,
    mock_messaging_client_cls,
    mock_registry_manager_cls,
)


@pytest.fixture
def arbitrary_exception():
    class ArbitraryException(Exception):
        pass

    return ArbitraryException("arbitrary exception")
