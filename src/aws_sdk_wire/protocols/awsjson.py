# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from dataclasses import dataclass
from typing import Any

from .._http import AWSRequest, Field
from ..documents import deserialize_document, parse_json_error_info, serialize_document
from ..interfaces.http import Response
from .base import HttpClientProtocol

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/x-amz-json-1.0"


@dataclass(frozen=True, kw_only=True)
class AwsJsonServiceConfig:
    target_prefix: str
    """Prefix of the ``X-Amz-Target`` header, for example ``DynamoDB_20120810``."""


class AwsJson1_0Protocol(HttpClientProtocol[AwsJsonServiceConfig, str]):
    """JSON-RPC style protocol. The operation config is the operation name."""

    name = "awsJson1_0"

    def input_request(
        self,
        service: AwsJsonServiceConfig,
        endpoint: str,
        operation: str,
        input: Any,
    ) -> AWSRequest:
        target = f"{service.target_prefix}.{operation}"
        logger.debug("Serializing %s request for %s", self.name, target)
        return self._build_request(
            endpoint=endpoint,
            path="/",
            method="POST",
            content_type=CONTENT_TYPE,
            body=serialize_document(input),
            extra_fields=[Field(name="X-Amz-Target", values=[target])],
        )

    def _deserialize(
        self, service: AwsJsonServiceConfig, operation: str, body: bytes
    ) -> Any:
        return deserialize_document(body)

    def _error_info(
        self, response: Response, body: bytes
    ) -> tuple[str, str, str | None]:
        info = parse_json_error_info(response.fields, body)
        return info.code, info.message, None
