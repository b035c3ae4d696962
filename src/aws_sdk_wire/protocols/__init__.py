# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..exceptions import ConfigurationError
from .awsjson import AwsJson1_0Protocol, AwsJsonServiceConfig
from .awsquery import AwsQueryProtocol, AwsQueryServiceConfig, QueryOperationConfig
from .base import HttpClientProtocol
from .ec2query import Ec2QueryProtocol, Ec2QueryServiceConfig
from .restjson import RestJson1Protocol, RestJsonOperationConfig, RestJsonServiceConfig
from .restxml import RestXmlOperationConfig, RestXmlProtocol, RestXmlServiceConfig

PROTOCOLS: Mapping[str, HttpClientProtocol[Any, Any]] = MappingProxyType(
    {
        protocol.name: protocol
        for protocol in (
            AwsJson1_0Protocol(),
            AwsQueryProtocol(),
            Ec2QueryProtocol(),
            RestJson1Protocol(),
            RestXmlProtocol(),
        )
    }
)
"""Stateless protocol instances keyed by protocol name."""


def get_protocol(name: str) -> HttpClientProtocol[Any, Any]:
    """Look up a protocol by its name tag, for example ``awsJson1_0``.

    :raises ConfigurationError: If no protocol has that name.
    """
    try:
        return PROTOCOLS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown protocol {name!r}. Expected one of: {', '.join(PROTOCOLS)}."
        ) from None


__all__ = (
    "PROTOCOLS",
    "AwsJson1_0Protocol",
    "AwsJsonServiceConfig",
    "AwsQueryProtocol",
    "AwsQueryServiceConfig",
    "Ec2QueryProtocol",
    "Ec2QueryServiceConfig",
    "HttpClientProtocol",
    "QueryOperationConfig",
    "RestJson1Protocol",
    "RestJsonOperationConfig",
    "RestJsonServiceConfig",
    "RestXmlOperationConfig",
    "RestXmlProtocol",
    "RestXmlServiceConfig",
    "get_protocol",
)
