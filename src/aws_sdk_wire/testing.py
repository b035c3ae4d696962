# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections import deque
from copy import deepcopy

from ._http import AWSRequest, AWSResponse, Fields
from ._io import async_list


class MockHTTPClient:
    """An :py:class:`~aws_sdk_wire.client.HTTPClient` solely for testing purposes.

    Responses are queued in FIFO order and requests are captured for inspection.
    """

    def __init__(self) -> None:
        self._response_queue: deque[AWSResponse] = deque()
        self._captured_requests: list[AWSRequest] = []

    def add_response(
        self,
        status: int = 200,
        headers: list[tuple[str, str]] | None = None,
        body: bytes = b"",
    ) -> None:
        """Queue a response for the next request.

        :param status: HTTP status code (200, 404, 500, etc.)
        :param headers: HTTP response headers as list of (name, value) tuples
        :param body: Response body as bytes
        """
        response = AWSResponse(
            status=status,
            fields=Fields.from_tuples(headers or []),
            body=async_list([body]),
        )
        self._response_queue.append(response)

    async def send(self, request: AWSRequest) -> AWSResponse:
        """Capture the request and return the next queued response.

        :raises MockHTTPClientError: If no responses are queued.
        """
        self._captured_requests.append(deepcopy(request))

        if self._response_queue:
            return self._response_queue.popleft()
        raise MockHTTPClientError(
            "No responses queued in MockHTTPClient. Use add_response() to queue "
            "responses."
        )

    @property
    def call_count(self) -> int:
        """The number of requests made to this client."""
        return len(self._captured_requests)

    @property
    def captured_requests(self) -> list[AWSRequest]:
        """The list of all requests captured by this client."""
        return self._captured_requests.copy()


class MockHTTPClientError(Exception):
    """Exception raised by MockHTTPClient for test setup issues."""
