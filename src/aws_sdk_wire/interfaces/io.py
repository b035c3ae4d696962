# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from collections.abc import AsyncIterable, Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteStream(Protocol):
    """A file-like object with a read method that returns bytes."""

    def read(self, size: int | None = -1, /) -> bytes: ...


@runtime_checkable
class AsyncByteStream(Protocol):
    """A file-like object with an async read method."""

    async def read(self, size: int | None = -1, /) -> bytes: ...


type StreamingBlob = (
    bytes
    | bytearray
    | ByteStream
    | AsyncByteStream
    | Iterable[bytes]
    | AsyncIterable[bytes]
)
"""Any source of bytes that can be used as a request or response body."""
