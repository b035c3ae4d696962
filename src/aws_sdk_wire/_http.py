# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import Counter, OrderedDict
from collections.abc import Iterable, Iterator
from copy import deepcopy
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

import aws_sdk_wire.interfaces.http as interfaces_http

from ._io import read_streaming_blob_async
from .interfaces.io import StreamingBlob

DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}


class Field(interfaces_http.Field):
    """One header of a request or response, holding one or more values.

    The name keeps the casing it was created with; lookups through
    :py:class:`Fields` ignore case.
    """

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        self.values = values

    def as_string(self) -> str:
        """Render the values as one header line value.

        No values render as ``""`` and a single value is returned as is. Several
        values are joined with ``", "``; a value holding a comma or a double quote
        is wrapped in double quotes first, with inner quotes and backslashes escaped.
        """
        match self.values:
            case []:
                return ""
            case [value]:
                return value
            case values:
                return ", ".join(quote_and_escape_field_value(v) for v in values)

    def __eq__(self, other: object) -> bool:
        """Equal when both name and values, in order, match."""
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, values={self.values!r})"


class Fields(interfaces_http.Fields):
    def __init__(self, initial: Iterable[interfaces_http.Field] | None = None):
        """Header collection keyed by lower-cased field name.

        :param initial: Fields to start with. Their names must differ once
            lower-cased.
        :raises ValueError: If two initial fields share a name.
        """
        fields = list(initial) if initial is not None else []
        keys = [self._normalize_field_name(fld.name) for fld in fields]
        duplicates = [key for key, count in Counter(keys).items() if count > 1]
        if duplicates:
            raise ValueError(
                f"Duplicate field names in initial fields: {', '.join(duplicates)}."
            )
        self.entries: OrderedDict[str, interfaces_http.Field] = OrderedDict(
            zip(keys, fields)
        )

    @classmethod
    def from_tuples(cls, pairs: Iterable[tuple[str, str]]) -> Fields:
        """Build a collection from name/value pairs.

        A repeated name appends to the existing entry instead of replacing it.
        """
        fields = cls()
        for name, value in pairs:
            if name in fields:
                fields[name].add(value)
            else:
                fields.set_field(Field(name=name, values=[value]))
        return fields

    def set_field(self, field: interfaces_http.Field) -> None:
        """Set or replace the entry for ``field.name``.

        Any existing entry with the same case-insensitive name is dropped, so the
        latest set value wins.
        """
        self.entries[self._normalize_field_name(field.name)] = field

    def get(
        self, key: str, default: interfaces_http.Field | None = None
    ) -> interfaces_http.Field | None:
        return self[key] if key in self else default

    def __getitem__(self, name: str) -> interfaces_http.Field:
        return self.entries[self._normalize_field_name(name)]

    def __delitem__(self, name: str) -> None:
        del self.entries[self._normalize_field_name(name)]

    def _normalize_field_name(self, name: str) -> str:
        return name.lower()

    def __eq__(self, other: object) -> bool:
        """Equal when entries match, including their order."""
        if not isinstance(other, Fields):
            return False
        return self.entries == other.entries

    def __iter__(self) -> Iterator[interfaces_http.Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Fields({self.entries})"

    def __contains__(self, key: str) -> bool:
        return self._normalize_field_name(key) in self.entries


@dataclass(kw_only=True, frozen=True)
class URI(interfaces_http.URI):
    """Where an :py:class:`AWSRequest` is sent."""

    scheme: str = "https"
    host: str
    port: int | None = None
    path: str | None = None
    query: str | None = None
    """The raw query string, without the leading ``?``."""

    @classmethod
    def parse(cls, url: str) -> URI:
        """Split an absolute URL into its components.

        :raises ValueError: If the URL has no host or an invalid port.
        """
        parts = urlsplit(url)
        # Reading the port validates it.
        port = parts.port
        if not parts.hostname:
            raise ValueError(f"Unable to parse a host from URL: {url!r}")
        return cls(
            scheme=parts.scheme or "https",
            host=parts.hostname,
            port=port,
            path=parts.path or None,
            query=parts.query or None,
        )

    @property
    def netloc(self) -> str:
        """``{host}:{port}``, or just the host when no port is set.

        IPv6 literals are wrapped in brackets.
        """
        if self.port is not None:
            return f"{self._bracketed_host}:{self.port}"
        return self._bracketed_host

    @property
    def host_header(self) -> str:
        """The value of a ``Host`` header for this URI.

        The port is left out when it is the default for the scheme.
        """
        if self.port is not None and DEFAULT_PORTS.get(self.scheme) == self.port:
            return self._bracketed_host
        return self.netloc

    @property
    def _bracketed_host(self) -> str:
        if ":" in self.host and not self.host.startswith("["):
            return f"[{self.host}]"
        return self.host

    def build(self) -> str:
        """Render the URI as ``{scheme}://{netloc}{path}?{query}``."""
        return urlunsplit(
            (self.scheme, self.netloc, self.path or "", self.query or "", "")
        )


class AWSRequest(interfaces_http.Request):
    def __init__(
        self,
        *,
        destination: URI,
        method: str,
        body: StreamingBlob | None = None,
        fields: Fields | None = None,
    ):
        """An outgoing request, before or after signing.

        :param destination: Where the request is sent.
        :param method: The HTTP method.
        :param body: The payload, if any.
        :param fields: The request headers.
        """
        self.destination = destination
        self.method = method
        self.body = body
        self.fields = fields if fields is not None else Fields()

    async def consume_body_async(self) -> bytes:
        """Read the whole request body and return it as bytes."""
        return await read_streaming_blob_async(self.body)

    def __deepcopy__(self, memo: dict[int, AWSRequest] | None = None) -> AWSRequest:
        if memo is None:
            memo = {}
        if id(self) in memo:
            return memo[id(self)]

        # URIs are frozen and bodies may be one-shot streams, so only the fields
        # are copied.
        copied = self.__class__(
            destination=self.destination,
            method=self.method,
            body=self.body,
            fields=deepcopy(self.fields, memo),
        )
        memo[id(self)] = copied
        return copied

    def __repr__(self) -> str:
        return (
            f"AWSRequest(method={self.method!r}, "
            f"destination={self.destination.build()!r}, fields={self.fields!r})"
        )


class AWSResponse(interfaces_http.Response):
    def __init__(
        self,
        *,
        status: int,
        body: StreamingBlob = b"",
        fields: Fields | None = None,
        reason: str | None = None,
    ):
        """A response received from a transport.

        :param status: The HTTP status code.
        :param body: The response payload.
        :param fields: The response headers.
        :param reason: Optional reason phrase sent alongside the status.
        """
        self._status = status
        self._body = body
        self._fields = fields if fields is not None else Fields()
        self.reason = reason

    @property
    def status(self) -> int:
        return self._status

    @property
    def fields(self) -> Fields:
        return self._fields

    @property
    def body(self) -> StreamingBlob:
        return self._body

    async def consume_body_async(self) -> bytes:
        """Read the whole response body and return it as bytes."""
        return await read_streaming_blob_async(self._body)

    def __repr__(self) -> str:
        return (
            f"AWSResponse(status={self._status!r}, fields={self._fields!r}, "
            f"reason={self.reason!r})"
        )


def quote_and_escape_field_value(value: str) -> str:
    """Quote a :class:`Field` value holding a comma or double quote.

    Inside the quotes, backslashes and double quotes are escaped with a backslash.
    Other values are returned unchanged.
    """
    if "," not in value and '"' not in value:
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
