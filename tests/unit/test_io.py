# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from io import BytesIO

import pytest
from aws_sdk_wire._io import async_list, read_streaming_blob_async
from aws_sdk_wire.interfaces.io import StreamingBlob


class _AsyncReader:
    def __init__(self, data: bytes) -> None:
        self._data = data

    async def read(self, size: int | None = -1) -> bytes:
        return self._data


@pytest.mark.parametrize(
    "body, expected",
    [
        (None, b""),
        (b"foo", b"foo"),
        (bytearray(b"foo"), b"foo"),
        (BytesIO(b"foo"), b"foo"),
        ([b"f", b"oo"], b"foo"),
        (_AsyncReader(b"foo"), b"foo"),
    ],
)
async def test_read_streaming_blob_async(
    body: StreamingBlob | None, expected: bytes
) -> None:
    assert await read_streaming_blob_async(body) == expected


async def test_read_async_iterable() -> None:
    assert await read_streaming_blob_async(async_list([b"f", b"o", b"o"])) == b"foo"


async def test_async_list() -> None:
    assert [x async for x in async_list([1, 2, 3])] == [1, 2, 3]
