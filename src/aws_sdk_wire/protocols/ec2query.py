# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from dataclasses import dataclass
from typing import Any

from .._http import AWSRequest
from ..interfaces.http import Response
from ..types import Value
from ..xml import from_ec2_xml_document, parse_error_info
from .awsquery import CONTENT_TYPE, QueryOperationConfig, serialize_query_body
from .base import HttpClientProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Ec2QueryServiceConfig:
    version: str
    """The API version sent as the ``Version`` parameter."""


class Ec2QueryProtocol(
    HttpClientProtocol[Ec2QueryServiceConfig, QueryOperationConfig]
):
    """EC2 flavored query protocol.

    Requests are framed exactly like ``awsQuery``. Responses carry the output
    members directly under the root element instead of a result wrapper, so the
    operation's ``output`` name is not used.
    """

    name = "ec2Query"

    def input_request(
        self,
        service: Ec2QueryServiceConfig,
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
        service: Ec2QueryServiceConfig,
        operation: QueryOperationConfig,
        body: bytes,
    ) -> dict[str, Value]:
        return from_ec2_xml_document(body)

    def _error_info(
        self, response: Response, body: bytes
    ) -> tuple[str, str, str | None]:
        info = parse_error_info(body)
        return info.code, info.message, info.request_id
