# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import Literal


class BaseAWSSDKException(Exception):
    """Top-level exception to capture SDK-related errors."""


class CredentialsError(BaseAWSSDKException):
    """Credentials were missing, incomplete, or expired.

    Errors raised by a credentials supplier itself are never wrapped in this type.
    """


class ConfigurationError(BaseAWSSDKException, ValueError):
    """A service or operation descriptor is missing a required value."""


class SerializationError(BaseAWSSDKException, TypeError):
    """An input value can't be expressed in the target wire format."""


class MalformedResponseError(BaseAWSSDKException):
    """A response body could not be decoded."""


class MissingRootElementError(MalformedResponseError):
    """The XML document has no root element."""


class UnexpectedNodeError(MalformedResponseError):
    """The XML tree contains a node that is neither an element nor text."""


class MissingElementError(MalformedResponseError):
    """An expected result or metadata element is absent."""


type Fault = Literal["client", "server"] | None
"""Whether the client or server is at fault.

If None, then there was not enough information to determine fault.
"""


@dataclass(kw_only=True)
class ServiceError(BaseAWSSDKException):
    """The service answered with a non-success status."""

    code: str
    """The error code reported by the service, or ``Unknown``."""

    message: str = field(default="", kw_only=False)
    """The message of the error."""

    status: int
    """The HTTP status code of the response."""

    request_id: str | None = None
    """The request id reported by the service, if any."""

    fault: Fault = None
    """Whether the client or server is at fault."""

    def __post_init__(self):
        super().__init__(f"{self.code}: {self.message}" if self.message else self.code)
