# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from typing import Any, Protocol

from ._http import AWSRequest
from .config import ClientConfig
from .interfaces.http import Response
from .protocols.base import HttpClientProtocol
from .signers import Signer

logger = logging.getLogger(__name__)


class HTTPClient(Protocol):
    """An asynchronous HTTP client that performs the actual network exchange."""

    async def send(self, request: AWSRequest) -> Response:
        """Send a request and return the response.

        :param request: The signed request, including destination, fields, and body.
        """
        ...


async def invoke_operation[S, O](
    *,
    protocol: HttpClientProtocol[S, O],
    service: S,
    operation: O,
    input: Any,
    client_config: ClientConfig,
    signer: Signer,
    endpoint: str,
    transport: HTTPClient,
) -> Any:
    """Run one operation call: build, sign, send, and decode.

    Nothing is retried. Errors from any step propagate to the caller.
    """
    request = protocol.input_request(service, endpoint, operation, input)
    signed = await signer(request, client_config)
    logger.debug("Sending %s request: %r", protocol.name, signed)
    response = await transport.send(signed)
    logger.debug("Received response with status %s", response.status)
    return await protocol.output_result(service, operation, response)


def regional_endpoint(prefix: str, region: str) -> str:
    """Return the standard AWS host for a service endpoint prefix in a region."""
    return f"{prefix}.{region}.amazonaws.com"
