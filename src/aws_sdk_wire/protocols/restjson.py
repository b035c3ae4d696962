# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from dataclasses import dataclass
from typing import Any

from .._http import AWSRequest
from ..documents import deserialize_document, parse_json_error_info, serialize_document
from ..interfaces.http import Response
from ..signers import BODILESS_METHODS
from .base import HttpClientProtocol

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"


@dataclass(frozen=True, kw_only=True)
class RestJsonServiceConfig:
    pass


@dataclass(frozen=True, kw_only=True)
class RestJsonOperationConfig:
    method: str
    """The HTTP method, for example ``PUT``."""

    path: str
    """The absolute request path, optionally with a query string."""


class RestJson1Protocol(
    HttpClientProtocol[RestJsonServiceConfig, RestJsonOperationConfig]
):
    name = "restJson1"

    def input_request(
        self,
        service: RestJsonServiceConfig,
        endpoint: str,
        operation: RestJsonOperationConfig,
        input: Any,
    ) -> AWSRequest:
        method = operation.method.upper()
        logger.debug(
            "Serializing %s request for %s %s", self.name, method, operation.path
        )
        return self._build_request(
            endpoint=endpoint,
            path=operation.path,
            method=method,
            content_type=CONTENT_TYPE,
            body=None if method in BODILESS_METHODS else serialize_document(input),
        )

    def _deserialize(
        self,
        service: RestJsonServiceConfig,
        operation: RestJsonOperationConfig,
        body: bytes,
    ) -> Any:
        return deserialize_document(body)

    def _error_info(
        self, response: Response, body: bytes
    ) -> tuple[str, str, str | None]:
        info = parse_json_error_info(response.fields, body)
        return info.code, info.message, None
