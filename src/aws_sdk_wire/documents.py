# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import json
from collections.abc import Mapping
from io import BytesIO
from typing import Any, NamedTuple

import ijson  # type: ignore

from .exceptions import MalformedResponseError, SerializationError
from .interfaces.http import Fields
from .types import Document

_JSON_CODE_HEADER = "x-amzn-errortype"

_JSON_CODE_KEYS = {"__type", "code"}

_JSON_MESSAGE_KEYS = {"message", "errormessage", "error_message"}


class JsonErrorInfo(NamedTuple):
    """Generic error information from a JSON protocol error."""

    code: str
    """The error code."""

    message: str
    """The generic error message.

    This is based off of checking the most common locations and is intended for
    errors whose message is bound somewhere unusual or which are unknown.
    """

    json_body: dict[str, Any] | None = None
    """The response body parsed as JSON."""


def serialize_document(value: Any) -> bytes:
    """Serialize a value as compact UTF-8 JSON.

    :raises SerializationError: If the value contains something JSON can't express.
    """
    try:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Unable to serialize JSON document: {e}") from e


def deserialize_document(body: bytes) -> Document:
    """Parse a JSON body. An empty body parses as an empty mapping.

    :raises MalformedResponseError: If the body is not a single JSON value.
    """
    if not body.strip():
        return {}
    try:
        # Draining the generator makes ijson reject trailing data.
        values = list(ijson.items(BytesIO(body), "", use_float=True))
    except (ijson.JSONError, UnicodeDecodeError) as e:
        raise MalformedResponseError(f"Unable to parse JSON document: {e}") from e
    return values[0]


def parse_json_error_info(fields: Fields, body: bytes) -> JsonErrorInfo:
    """Parses generic error info from a JSON protocol error response.

    :param fields: The response headers.
    :param body: The response body.
    :returns: The parsed error information.
    """
    code: str | None = None
    message: str | None = None
    json_body: dict[str, Any] | None = None

    if _JSON_CODE_HEADER in fields:
        code = fields[_JSON_CODE_HEADER].values[0]

    try:
        parsed = deserialize_document(body)
    except MalformedResponseError:
        parsed = None
    if isinstance(parsed, Mapping):
        json_body = dict(parsed)
        for key, value in json_body.items():
            key_lower = key.lower()
            if not code and key_lower in _JSON_CODE_KEYS and isinstance(value, str):
                code = value
            if (
                not message
                and key_lower in _JSON_MESSAGE_KEYS
                and isinstance(value, str)
            ):
                message = value

    # Normalize the error code. Some services may try to send a fully-qualified shape
    # ID or a URI, but we don't want to include those.
    if code:
        if "#" in code:
            code = code.split("#")[1]
        code = code.split(":")[0]

    return JsonErrorInfo(code or "Unknown", message or "Unknown", json_body)
