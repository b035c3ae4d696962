# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from .io import StreamingBlob


class Field(Protocol):
    """A header name with one or more values.

    Names are case insensitive. The original casing is kept for transmission, but
    lookups and canonical forms always use the lower-cased name.
    """

    name: str
    values: list[str]

    def add(self, value: str) -> None:
        """Add one more value after the existing ones."""
        ...

    def set(self, values: list[str]) -> None:
        """Replace all values."""
        ...

    def as_string(self) -> str:
        """All values rendered as one header value."""
        ...


class Fields(Protocol):
    """Case-insensitive mapping of header names to :py:class:`Field` entries."""

    # Entries are keyed off the lower-cased name of a provided Field
    entries: OrderedDict[str, Field]

    def set_field(self, field: Field) -> None:
        """Set or replace the entry for ``field.name``."""
        ...

    def __getitem__(self, name: str) -> Field:
        """Look up a field by case-insensitive name."""
        ...

    def __delitem__(self, name: str) -> None:
        """Remove a field by case-insensitive name."""
        ...

    def __contains__(self, name: str) -> bool: ...

    def __iter__(self) -> Iterator[Field]:
        """Iterate over fields in insertion order."""
        ...

    def __len__(self) -> int:
        """Number of distinct field names."""
        ...


@runtime_checkable
class URI(Protocol):
    """The target location of a :py:class:`Request`."""

    scheme: str
    """For example ``https``."""

    host: str
    """Host name without port, for example ``sts.us-east-1.amazonaws.com``."""

    port: int | None
    """Port, when it is given explicitly."""

    path: str | None
    """Path component of the URI."""

    query: str | None
    """Query component of the URI as string, without the leading ``?``."""

    def build(self) -> str:
        """Render the URI as an absolute URL string."""
        ...

    @property
    def netloc(self) -> str:
        """``{host}:{port}``, or the host alone without a port."""
        ...


class Request(Protocol):
    """Transport-agnostic representation of an outgoing request."""

    method: str
    destination: URI
    fields: Fields
    body: StreamingBlob | None


class Response(Protocol):
    """Transport-agnostic representation of a received response."""

    @property
    def status(self) -> int:
        """The 3 digit response status code (1xx, 2xx, 3xx, 4xx, 5xx)."""
        ...

    @property
    def fields(self) -> Fields:
        """``Fields`` object containing the response headers."""
        ...

    @property
    def body(self) -> StreamingBlob:
        """The response payload."""
        ...

    async def consume_body_async(self) -> bytes:
        """Read the whole response body and return it as bytes."""
        ...
