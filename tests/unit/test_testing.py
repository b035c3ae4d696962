# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from aws_sdk_wire import URI, AWSRequest
from aws_sdk_wire.testing import MockHTTPClient, MockHTTPClientError


def create_test_request(method: str = "GET", body: bytes | None = None) -> AWSRequest:
    return AWSRequest(
        destination=URI(host="test.aws.dev", path="/"), method=method, body=body
    )


async def test_default_response() -> None:
    mock_client = MockHTTPClient()

    with pytest.raises(MockHTTPClientError, match="No responses queued"):
        await mock_client.send(create_test_request())


async def test_queued_responses_fifo() -> None:
    mock_client = MockHTTPClient()
    mock_client.add_response(status=404, body=b"not found")
    mock_client.add_response(status=500, body=b"server error")

    response1 = await mock_client.send(create_test_request())
    assert response1.status == 404
    assert await response1.consume_body_async() == b"not found"

    response2 = await mock_client.send(create_test_request())
    assert response2.status == 500
    assert await response2.consume_body_async() == b"server error"

    assert mock_client.call_count == 2


async def test_captured_requests() -> None:
    mock_client = MockHTTPClient()
    mock_client.add_response()
    mock_client.add_response()

    await mock_client.send(create_test_request())
    await mock_client.send(create_test_request("POST", b'{"name": "test"}'))

    captured = mock_client.captured_requests
    assert len(captured) == 2
    assert captured[0].method == "GET"
    assert captured[1].method == "POST"
    assert captured[1].body == b'{"name": "test"}'


async def test_response_headers() -> None:
    mock_client = MockHTTPClient()
    mock_client.add_response(
        status=201,
        headers=[("Content-Type", "application/json"), ("X-Amz-Custom", "test")],
        body=b'{"id": 123}',
    )

    response = await mock_client.send(create_test_request())

    assert response.status == 201
    assert response.fields["content-type"].as_string() == "application/json"
    assert response.fields["X-Amz-Custom"].as_string() == "test"
