# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Any

import pytest
from aws_sdk_wire import AWSResponse
from aws_sdk_wire.exceptions import (
    MissingElementError,
    SerializationError,
    ServiceError,
)
from aws_sdk_wire.protocols import (
    AwsQueryProtocol,
    AwsQueryServiceConfig,
    QueryOperationConfig,
)
from aws_sdk_wire.protocols.awsquery import serialize_query_body

SERVICE = AwsQueryServiceConfig(
    version="2010-05-08", xml_namespace="https://iam.amazonaws.com/doc/2010-05-08/"
)
LIST_USERS = QueryOperationConfig(action="ListUsers", output="ListUsersResult")
PROTOCOL = AwsQueryProtocol()


@pytest.mark.parametrize(
    "input, expected",
    [
        (None, b"Action=ListUsers&Version=2010-05-08"),
        ({}, b"Action=ListUsers&Version=2010-05-08"),
        (
            {"MaxItems": 10, "PathPrefix": "/division abc/"},
            b"MaxItems=10&PathPrefix=%2Fdivision+abc%2F"
            b"&Action=ListUsers&Version=2010-05-08",
        ),
        (
            {"Enabled": False, "Marker": None},
            b"Enabled=false&Action=ListUsers&Version=2010-05-08",
        ),
        (
            {"Action": "Other", "Version": "1999-01-01", "A": "b"},
            b"Action=ListUsers&Version=2010-05-08&A=b",
        ),
    ],
)
def test_serialize_query_body(input: Any, expected: bytes) -> None:
    assert serialize_query_body(input, "ListUsers", "2010-05-08") == expected


@pytest.mark.parametrize(
    "input", [["a"], "a=b", {"Tags": {"a": "b"}}, {"Ids": ["a", "b"]}]
)
def test_serialize_query_body_rejects_unsupported_input(input: Any) -> None:
    with pytest.raises(SerializationError):
        serialize_query_body(input, "ListUsers", "2010-05-08")


async def test_input_request() -> None:
    request = PROTOCOL.input_request(
        SERVICE, "iam.amazonaws.com", LIST_USERS, {"MaxItems": 10}
    )

    assert request.method == "POST"
    assert request.destination.build() == "https://iam.amazonaws.com/"
    assert (
        request.fields["Content-Type"].as_string()
        == "application/x-www-form-urlencoded"
    )
    assert await request.consume_body_async() == (
        b"MaxItems=10&Action=ListUsers&Version=2010-05-08"
    )


async def test_output_result() -> None:
    body = b"""<ListUsersResponse xmlns="https://iam.amazonaws.com/doc/2010-05-08/">
  <ListUsersResult>
    <Users>
      <member><UserName>Alice</UserName></member>
      <member><UserName>Bob</UserName></member>
    </Users>
    <IsTruncated>false</IsTruncated>
  </ListUsersResult>
  <ResponseMetadata>
    <RequestId>7a62c49f-347e-4fc4-9331-6e8eEXAMPLE</RequestId>
  </ResponseMetadata>
</ListUsersResponse>"""
    response = AWSResponse(status=200, body=body)

    result = await PROTOCOL.output_result(SERVICE, LIST_USERS, response)

    assert result == {
        "Users": {"member": [{"UserName": "Alice"}, {"UserName": "Bob"}]},
        "IsTruncated": "false",
        "$metadata": {"RequestId": "7a62c49f-347e-4fc4-9331-6e8eEXAMPLE"},
    }


async def test_output_result_without_output() -> None:
    operation = QueryOperationConfig(action="DeleteUser")
    body = (
        b"<DeleteUserResponse><ResponseMetadata><RequestId>r1</RequestId>"
        b"</ResponseMetadata></DeleteUserResponse>"
    )
    response = AWSResponse(status=200, body=body)
    result = await PROTOCOL.output_result(SERVICE, operation, response)
    assert result == {"$metadata": {"RequestId": "r1"}}


async def test_output_result_missing_result() -> None:
    body = (
        b"<ListUsersResponse><ResponseMetadata><RequestId>r1</RequestId>"
        b"</ResponseMetadata></ListUsersResponse>"
    )
    with pytest.raises(MissingElementError):
        await PROTOCOL.output_result(
            SERVICE, LIST_USERS, AWSResponse(status=200, body=body)
        )


async def test_output_result_error() -> None:
    body = b"""<ErrorResponse xmlns="https://iam.amazonaws.com/doc/2010-05-08/">
  <Error>
    <Type>Sender</Type>
    <Code>NoSuchEntity</Code>
    <Message>The user with name Carol cannot be found.</Message>
  </Error>
  <RequestId>e1b5c7d2-EXAMPLE</RequestId>
</ErrorResponse>"""
    response = AWSResponse(status=404, body=body)

    with pytest.raises(ServiceError) as exc_info:
        await PROTOCOL.output_result(SERVICE, LIST_USERS, response)

    error = exc_info.value
    assert error.code == "NoSuchEntity"
    assert error.message == "The user with name Carol cannot be found."
    assert error.request_id == "e1b5c7d2-EXAMPLE"
    assert error.fault == "client"
