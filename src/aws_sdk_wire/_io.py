# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from asyncio import iscoroutinefunction, sleep
from collections.abc import AsyncIterable, Iterable

from .interfaces.io import AsyncByteStream, ByteStream, StreamingBlob


async def async_list[E](lst: Iterable[E]) -> AsyncIterable[E]:
    """Turn an Iterable into an AsyncIterable."""
    for x in lst:
        await sleep(0)
        yield x


async def read_streaming_blob_async(body: StreamingBlob | None) -> bytes:
    """Asynchronously reads a streaming blob into bytes.

    A missing body reads as empty.

    :param body: The streaming blob to read from.
    """
    if body is None:
        return b""
    if isinstance(body, bytes | bytearray):
        return bytes(body)
    # Python's runtime_checkable can't actually tell the difference between sync
    # and async read methods, so we have to check ourselves.
    if isinstance(body, AsyncByteStream) and iscoroutinefunction(body.read):
        return await body.read()
    if isinstance(body, AsyncIterable):
        full = b""
        async for chunk in body:
            full += chunk
        return full
    if isinstance(body, ByteStream):
        return body.read()
    return b"".join(body)
