# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from aws_sdk_wire import (
    AWSCredentialIdentity,
    ClientConfig,
    create_signer,
    get_protocol,
    invoke_operation,
    regional_endpoint,
    static_credentials,
)
from aws_sdk_wire.exceptions import ServiceError
from aws_sdk_wire.protocols import AwsJsonServiceConfig
from aws_sdk_wire.testing import MockHTTPClient


@pytest.fixture
def client_config() -> ClientConfig:
    identity = AWSCredentialIdentity(
        access_key_id="AKIDEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
    )
    return ClientConfig(region="us-east-1", credentials=static_credentials(identity))


def test_regional_endpoint() -> None:
    assert regional_endpoint("dynamodb", "eu-west-1") == (
        "dynamodb.eu-west-1.amazonaws.com"
    )


async def test_invoke_operation(client_config: ClientConfig) -> None:
    transport = MockHTTPClient()
    transport.add_response(
        status=200,
        headers=[("Content-Type", "application/x-amz-json-1.0")],
        body=b'{"TableNames":["Music"]}',
    )

    result = await invoke_operation(
        protocol=get_protocol("awsJson1_0"),
        service=AwsJsonServiceConfig(target_prefix="DynamoDB_20120810"),
        operation="ListTables",
        input={"Limit": 10},
        client_config=client_config,
        signer=create_signer("dynamodb"),
        endpoint=regional_endpoint("dynamodb", client_config.region),
        transport=transport,
    )

    assert result == {"TableNames": ["Music"]}
    assert transport.call_count == 1
    sent = transport.captured_requests[0]
    assert sent.destination.host == "dynamodb.us-east-1.amazonaws.com"
    assert sent.body == b'{"Limit":10}'
    assert sent.fields["Authorization"].as_string().startswith(
        "AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/"
    )
    assert "/us-east-1/dynamodb/aws4_request," in (
        sent.fields["Authorization"].as_string()
    )


async def test_invoke_operation_service_error(client_config: ClientConfig) -> None:
    transport = MockHTTPClient()
    transport.add_response(
        status=400,
        headers=[("x-amzn-RequestId", "REQ")],
        body=b'{"__type":"ValidationException","message":"bad"}',
    )

    with pytest.raises(ServiceError) as exc_info:
        await invoke_operation(
            protocol=get_protocol("awsJson1_0"),
            service=AwsJsonServiceConfig(target_prefix="DynamoDB_20120810"),
            operation="ListTables",
            input={"Limit": -1},
            client_config=client_config,
            signer=create_signer("dynamodb"),
            endpoint="dynamodb.us-east-1.amazonaws.com",
            transport=transport,
        )

    assert exc_info.value.code == "ValidationException"
    assert exc_info.value.request_id == "REQ"
