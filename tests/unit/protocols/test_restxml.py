# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from aws_sdk_wire import AWSResponse, Fields
from aws_sdk_wire.exceptions import MissingElementError, ServiceError
from aws_sdk_wire.protocols import (
    RestXmlOperationConfig,
    RestXmlProtocol,
    RestXmlServiceConfig,
)

SERVICE = RestXmlServiceConfig(
    xml_namespace="https://route53.amazonaws.com/doc/2013-04-01/"
)
CREATE_HOSTED_ZONE = RestXmlOperationConfig(
    method="POST",
    path="/2013-04-01/hostedzone",
    input="CreateHostedZoneRequest",
    output="CreateHostedZoneResponse",
)
PROTOCOL = RestXmlProtocol()


async def test_input_request() -> None:
    request = PROTOCOL.input_request(
        SERVICE,
        "route53.amazonaws.com",
        CREATE_HOSTED_ZONE,
        {"Name": "example.com", "CallerReference": "ref-1"},
    )

    assert request.method == "POST"
    assert request.destination.build() == (
        "https://route53.amazonaws.com/2013-04-01/hostedzone"
    )
    assert request.fields["Content-Type"].as_string() == "application/xml"
    assert await request.consume_body_async() == (
        b'<CreateHostedZoneRequest xmlns="https://route53.amazonaws.com/doc/'
        b'2013-04-01/"><Name>example.com</Name><CallerReference>ref-1'
        b"</CallerReference></CreateHostedZoneRequest>"
    )


async def test_input_request_with_prefix() -> None:
    service = RestXmlServiceConfig(xml_namespace="urn:x", xml_namespace_prefix="x")
    request = PROTOCOL.input_request(
        service, "example.com", CREATE_HOSTED_ZONE, {"Name": "a"}
    )
    assert await request.consume_body_async() == (
        b'<CreateHostedZoneRequest xmlns:x="urn:x"><Name>a</Name>'
        b"</CreateHostedZoneRequest>"
    )


def test_input_request_bodiless_method() -> None:
    operation = RestXmlOperationConfig(
        method="GET", path="/2013-04-01/hostedzone/Z1", input="GetHostedZoneRequest"
    )
    request = PROTOCOL.input_request(SERVICE, "route53.amazonaws.com", operation, {})
    assert request.method == "GET"
    assert request.body is None


async def test_output_result() -> None:
    body = b"""<?xml version="1.0" encoding="UTF-8"?>
<CreateHostedZoneResponse xmlns="https://route53.amazonaws.com/doc/2013-04-01/">
  <HostedZone>
    <Id>/hostedzone/Z1PA6795UKMFR9</Id>
    <Name>example.com.</Name>
  </HostedZone>
  <DelegationSet>
    <NameServers>
      <NameServer>ns-2048.awsdns-64.com</NameServer>
      <NameServer>ns-2049.awsdns-65.net</NameServer>
    </NameServers>
  </DelegationSet>
</CreateHostedZoneResponse>"""
    response = AWSResponse(status=201, body=body)

    result = await PROTOCOL.output_result(SERVICE, CREATE_HOSTED_ZONE, response)

    assert result == {
        "HostedZone": {"Id": "/hostedzone/Z1PA6795UKMFR9", "Name": "example.com."},
        "DelegationSet": {
            "NameServers": {
                "NameServer": ["ns-2048.awsdns-64.com", "ns-2049.awsdns-65.net"]
            }
        },
    }


async def test_output_result_without_output() -> None:
    operation = RestXmlOperationConfig(
        method="DELETE", path="/2013-04-01/hostedzone/Z1", input="Delete"
    )
    response = AWSResponse(status=204)
    assert await PROTOCOL.output_result(SERVICE, operation, response) == {}


async def test_output_result_missing_element() -> None:
    response = AWSResponse(status=200, body=b"<SomethingElse/>")
    with pytest.raises(MissingElementError):
        await PROTOCOL.output_result(SERVICE, CREATE_HOSTED_ZONE, response)


async def test_output_result_error() -> None:
    body = b"""<?xml version="1.0" encoding="UTF-8"?>
<Error>
  <Code>NoSuchKey</Code>
  <Message>The resource you requested does not exist</Message>
  <Resource>/mybucket/myfoto.jpg</Resource>
</Error>"""
    response = AWSResponse(
        status=404,
        body=body,
        fields=Fields.from_tuples([("x-amz-request-id", "4442587FB7D0A2F9")]),
    )

    with pytest.raises(ServiceError) as exc_info:
        await PROTOCOL.output_result(SERVICE, CREATE_HOSTED_ZONE, response)

    error = exc_info.value
    assert error.code == "NoSuchKey"
    assert error.message == "The resource you requested does not exist"
    assert error.request_id == "4442587FB7D0A2F9"
    assert error.fault == "client"
