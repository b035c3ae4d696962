# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""AWS SDK Wire provides request signing and the wire protocols used to talk to AWS
services: awsJson1_0, awsQuery, ec2Query, restJson1 and restXml."""

from __future__ import annotations

from ._http import URI, AWSRequest, AWSResponse, Field, Fields
from .client import HTTPClient, invoke_operation, regional_endpoint
from .config import ClientConfig
from .identity import (
    AWSCredentialIdentity,
    environment_credentials,
    static_credentials,
)
from .protocols import get_protocol
from .signers import (
    AsyncSigV4Signer,
    SigV4SigningProperties,
    authenticate,
    create_signer,
)

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "AWSCredentialIdentity",
    "AWSRequest",
    "AWSResponse",
    "AsyncSigV4Signer",
    "ClientConfig",
    "Field",
    "Fields",
    "HTTPClient",
    "SigV4SigningProperties",
    "authenticate",
    "create_signer",
    "environment_credentials",
    "get_protocol",
    "invoke_operation",
    "regional_endpoint",
    "static_credentials",
)
