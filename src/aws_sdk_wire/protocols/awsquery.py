# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any
from urllib.parse import urlencode

from .._http import AWSRequest
from ..exceptions import SerializationError
from ..interfaces.http import Response
from ..types import Value
from ..xml import from_xml_document_with_metadata, parse_error_info
from .base import HttpClientProtocol

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True, kw_only=True)
class AwsQueryServiceConfig:
    version: str
    """The API version sent as the ``Version`` parameter."""

    xml_namespace: str
    """The namespace of response documents."""

    xml_namespace_prefix: str | None = None


@dataclass(frozen=True, kw_only=True)
class QueryOperationConfig:
    action: str
    """The operation name sent as the ``Action`` parameter."""

    output: str | None = None
    """Name of the result element, or None for operations without output."""


class AwsQueryProtocol(
    HttpClientProtocol[AwsQueryServiceConfig, QueryOperationConfig]
):
    name = "awsQuery"

    def input_request(
        self,
        service: AwsQueryServiceConfig,
        endpoint: str,
        operation: QueryOperationConfig,
        input: Any,
    ) -> AWSRequest:
        logger.debug("Serializing %s request for %s", self.name, operation.action)
        return self._build_request(
            endpoint=endpoint,
            path="/",
            method="POST",
            content_type=CONTENT_TYPE,
            body=serialize_query_body(input, operation.action, service.version),
        )

    def _deserialize(
        self,
        service: AwsQueryServiceConfig,
        operation: QueryOperationConfig,
        body: bytes,
    ) -> dict[str, Value]:
        return from_xml_document_with_metadata(body, operation.output)

    def _error_info(
        self, response: Response, body: bytes
    ) -> tuple[str, str, str | None]:
        info = parse_error_info(body)
        return info.code, info.message, info.request_id


def serialize_query_body(input: Any, action: str, version: str) -> bytes:
    """Form-encode the input members followed by ``Action`` and ``Version``.

    ``Action`` and ``Version`` replace same-named input members in place. Members
    set to None are left out.

    :raises SerializationError: If the input is not a mapping of scalar values.
    """
    if input is None:
        input = {}
    if not isinstance(input, Mapping):
        raise SerializationError(
            f"Query input must be a mapping, got {type(input).__name__}"
        )
    params = {**input, "Action": action, "Version": version}
    pairs = [
        (key, _format_query_value(key, value))
        for key, value in params.items()
        if value is not None
    ]
    return urlencode(pairs).encode("utf-8")


def _format_query_value(key: str, value: Any) -> str:
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float() | Decimal():
            return str(value)
        case _:
            raise SerializationError(
                f"Query parameter {key!r} must be a scalar, got {type(value).__name__}"
            )
