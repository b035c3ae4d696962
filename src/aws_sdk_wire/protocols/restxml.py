# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from dataclasses import dataclass
from typing import Any

from .._http import AWSRequest
from ..interfaces.http import Response
from ..signers import BODILESS_METHODS
from ..types import Value
from ..xml import from_xml_document, parse_error_info, to_xml_document
from .base import HttpClientProtocol

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/xml"


@dataclass(frozen=True, kw_only=True)
class RestXmlServiceConfig:
    xml_namespace: str
    """The namespace set on the root element of request documents."""

    xml_namespace_prefix: str | None = None


@dataclass(frozen=True, kw_only=True)
class RestXmlOperationConfig:
    method: str
    """The HTTP method, for example ``PUT``."""

    path: str
    """The absolute request path, optionally with a query string."""

    input: str
    """Name of the root element of the request document."""

    output: str | None = None
    """Name of the result element, or None for operations without output."""


class RestXmlProtocol(
    HttpClientProtocol[RestXmlServiceConfig, RestXmlOperationConfig]
):
    name = "restXml"

    def input_request(
        self,
        service: RestXmlServiceConfig,
        endpoint: str,
        operation: RestXmlOperationConfig,
        input: Any,
    ) -> AWSRequest:
        method = operation.method.upper()
        logger.debug(
            "Serializing %s request for %s %s", self.name, method, operation.path
        )
        body = None
        if method not in BODILESS_METHODS:
            body = to_xml_document(
                input,
                operation.input,
                service.xml_namespace,
                service.xml_namespace_prefix,
            ).encode("utf-8")
        return self._build_request(
            endpoint=endpoint,
            path=operation.path,
            method=method,
            content_type=CONTENT_TYPE,
            body=body,
        )

    def _deserialize(
        self,
        service: RestXmlServiceConfig,
        operation: RestXmlOperationConfig,
        body: bytes,
    ) -> Value:
        if operation.output is None:
            return {}
        return from_xml_document(body, operation.output)

    def _error_info(
        self, response: Response, body: bytes
    ) -> tuple[str, str, str | None]:
        info = parse_error_info(body)
        return info.code, info.message, info.request_id
