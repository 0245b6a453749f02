# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines constants for use across the iothub-e2e-account package
"""

VERSION = "1.0.0"
USER_AGENT = "Microsoft.Azure.Devices/1.0.0"

SAS_DEVICE_PREFIX_FMT = "python_e2eDevice_sas_please_delete_%s"
X509_DEVICE_PREFIX_FMT = "python_e2eDevice_x509_please_delete_%s"
DEVICE_STATUS_ENABLED = "enabled"

DEFAULT_SAS_TTL = 3600
DEFAULT_CONSUMER_GROUP = "$Default"
DEFAULT_PARTITION_COUNT = 16
