# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from typing import Any, ClassVar

from .._http import AWSRequest, Field, Fields, URI
from ..exceptions import ConfigurationError, Fault, ServiceError
from ..interfaces.http import Response

logger = logging.getLogger(__name__)

_REQUEST_ID_HEADERS = ("x-amzn-requestid", "x-amz-request-id")


class HttpClientProtocol[S, O]:
    """An HTTP-based wire protocol.

    Implementations are stateless: every call is a function of the given service
    config, operation config, and input or response. ``S`` is the protocol's service
    config type and ``O`` its operation config type.
    """

    name: ClassVar[str]
    """The protocol name tag the protocol is registered under."""

    def input_request(
        self, service: S, endpoint: str, operation: O, input: Any
    ) -> AWSRequest:
        """Build an unsigned request for an operation.

        :param service: The service config.
        :param endpoint: The host to send to, optionally with a port or a scheme.
        :param operation: The operation config.
        :param input: The operation input.
        """
        raise NotImplementedError()

    async def output_result(self, service: S, operation: O, response: Response) -> Any:
        """Decode an operation's output from a response.

        :raises ServiceError: If the response status is not 2xx.
        :raises MalformedResponseError: If the body can't be decoded.
        """
        body = await response.consume_body_async()
        if not 200 <= response.status < 300:
            raise self._service_error(response, body)
        logger.debug("Deserializing %s response for %s", self.name, operation)
        return self._deserialize(service, operation, body)

    def _deserialize(self, service: S, operation: O, body: bytes) -> Any:
        raise NotImplementedError()

    def _error_info(
        self, response: Response, body: bytes
    ) -> tuple[str, str, str | None]:
        """Return the error code, message, and request id of an error response."""
        raise NotImplementedError()

    def _service_error(self, response: Response, body: bytes) -> ServiceError:
        code, message, request_id = self._error_info(response, body)
        if request_id is None:
            request_id = next(
                (
                    response.fields[header].as_string()
                    for header in _REQUEST_ID_HEADERS
                    if header in response.fields
                ),
                None,
            )
        fault: Fault = None
        if 400 <= response.status < 500:
            fault = "client"
        elif response.status >= 500:
            fault = "server"
        logger.debug(
            "%s service error %s (status %s, request id %s)",
            self.name,
            code,
            response.status,
            request_id,
        )
        return ServiceError(
            message,
            code=code,
            status=response.status,
            request_id=request_id,
            fault=fault,
        )

    def _build_request(
        self,
        *,
        endpoint: str,
        path: str,
        method: str,
        content_type: str,
        body: bytes | None,
        extra_fields: list[Field] | None = None,
    ) -> AWSRequest:
        fields = Fields([Field(name="Content-Type", values=[content_type])])
        for field in extra_fields or []:
            fields.set_field(field)
        return AWSRequest(
            destination=resolve_destination(endpoint, path),
            method=method,
            body=body,
            fields=fields,
        )


def resolve_destination(endpoint: str, path: str) -> URI:
    """Join an endpoint and an absolute path into a URI.

    Endpoints without a scheme are addressed over https.

    :raises ConfigurationError: If the path is not absolute or the result has no host.
    """
    if not path.startswith("/"):
        raise ConfigurationError(f"Operation path must start with '/', got {path!r}")
    base = endpoint if "://" in endpoint else f"https://{endpoint}"
    try:
        return URI.parse(base.rstrip("/") + path)
    except ValueError as e:
        raise ConfigurationError(f"Invalid endpoint {endpoint!r}: {e}") from e
