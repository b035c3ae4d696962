# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Conversion between tagged values and XML documents.

Encoding renders a :py:data:`~aws_sdk_wire.types.Value` beneath a namespaced root
element. Given the input::

    {"Foo": "bar", "Baz": ["qux", "quux"], "Corge": {"Grault": "garply"}}

the rendered document is::

    <Op xmlns="urn:x"><Foo>bar</Foo><Baz>quxquux</Baz><Corge><Grault>garply</Grault>
    </Corge></Op>

List items are rendered directly onto the parent element, without a ``member``
wrapper per item.

Decoding turns elements back into values. An element whose only child is text
becomes that string; any other element becomes a mapping of child element names to
their values, where a name that repeats collects its values into a list in document
order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, NamedTuple
from xml.etree import ElementTree as ET
from xml.parsers.expat import errors as expat_errors

from .exceptions import (
    MalformedResponseError,
    MissingElementError,
    MissingRootElementError,
    SerializationError,
    UnexpectedNodeError,
)
from .types import Value

logger = logging.getLogger(__name__)

METADATA_KEY = "$metadata"
RESPONSE_METADATA = "ResponseMetadata"
EC2_REQUEST_ID = "requestId"

_NO_ELEMENTS_CODE = expat_errors.codes[expat_errors.XML_ERROR_NO_ELEMENTS]


@dataclass
class XmlText:
    """A run of character data."""

    text: str


@dataclass
class XmlElement:
    """An element with its attributes and ordered child nodes."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[XmlNode] = field(default_factory=list)

    def to_string(self) -> str:
        """Serialize the element and its descendants, without an XML declaration."""
        return ET.tostring(self._to_etree(), encoding="unicode")

    def _to_etree(self) -> ET.Element:
        element = ET.Element(self.name, self.attributes)
        previous: ET.Element | None = None
        for child in self.children:
            match child:
                case XmlText(text=text) if previous is None:
                    element.text = (element.text or "") + text
                case XmlText(text=text):
                    previous.tail = (previous.tail or "") + text
                case XmlElement():
                    previous = child._to_etree()
                    element.append(previous)
                case _:
                    raise SerializationError(
                        f"Unable to serialize XML node of type {type(child).__name__}"
                    )
        return element

    @classmethod
    def from_etree(cls, element: ET.Element) -> XmlElement:
        """Convert an ElementTree element, keeping text runs as separate nodes.

        Namespace URIs are dropped from element and attribute names.
        """
        children: list[XmlNode] = []
        if element.text:
            children.append(XmlText(element.text))
        for child in element:
            # Comments and processing instructions carry a non-string tag.
            if isinstance(child.tag, str):
                children.append(cls.from_etree(child))
            if child.tail:
                children.append(XmlText(child.tail))
        return cls(
            name=_local_name(element.tag),
            attributes={_local_name(k): v for k, v in element.attrib.items()},
            children=children,
        )


type XmlNode = XmlElement | XmlText


class XmlErrorInfo(NamedTuple):
    """Generic error information from an XML error response."""

    code: str
    """The error code."""

    message: str
    """The generic error message."""

    request_id: str | None = None
    """The request id reported by the service, if present."""


def to_xml_document(
    value: Any, name: str, namespace: str, prefix: str | None = None
) -> str:
    """Render ``value`` beneath a root element named ``name``.

    The root carries ``xmlns`` (or ``xmlns:{prefix}``) set to ``namespace``.
    Mapping keys whose value is ``None`` are skipped. Booleans and numbers are
    written as their text form.

    :raises SerializationError: If the value contains something other than strings,
        booleans, numbers, sequences, and mappings.
    """
    attribute = f"xmlns:{prefix}" if prefix else "xmlns"
    root = XmlElement(name, {attribute: namespace})
    _append_value(root, value)
    return root.to_string()


def _append_value(parent: XmlElement, value: Any) -> None:
    match value:
        case None:
            return
        case str():
            parent.children.append(XmlText(value))
        case bool():
            parent.children.append(XmlText("true" if value else "false"))
        case int() | float() | Decimal():
            parent.children.append(XmlText(str(value)))
        case Mapping():
            for key, item in value.items():
                if item is None:
                    continue
                if not isinstance(key, str):
                    raise SerializationError(
                        f"Element names must be strings, got {type(key).__name__}"
                    )
                child = XmlElement(key)
                parent.children.append(child)
                _append_value(child, item)
        case bytes() | bytearray():
            raise SerializationError(
                f"Unable to write binary data under element {parent.name!r}"
            )
        case Sequence():
            for item in value:
                _append_value(parent, item)
        case _:
            raise SerializationError(
                f"Unable to write value of type {type(value).__name__} under "
                f"element {parent.name!r}"
            )


def parse_document(source: str | bytes) -> XmlElement:
    """Parse an XML document and return its root element.

    :raises MissingRootElementError: If the document has no root element.
    :raises MalformedResponseError: If the document is not well-formed.
    """
    try:
        root = ET.fromstring(source)
    except ET.ParseError as e:
        if e.code == _NO_ELEMENTS_CODE:
            raise MissingRootElementError("Missing root element") from e
        raise MalformedResponseError(f"Unable to parse XML document: {e}") from e
    try:
        return XmlElement.from_etree(root)
    except RecursionError as e:
        raise MalformedResponseError("XML document is nested too deeply") from e


def element_to_value(node: XmlNode) -> Value:
    """Convert a node and its descendants into a tagged value.

    :raises UnexpectedNodeError: If the tree holds a node that is neither an element
        nor text.
    :raises MalformedResponseError: If the tree is nested too deeply to convert.
    """
    try:
        return _element_to_value(node)
    except RecursionError as e:
        raise MalformedResponseError("XML document is nested too deeply") from e


def _element_to_value(node: XmlNode) -> Value:
    match node:
        case XmlElement(children=[XmlText(text=text)]):
            return text
        case XmlElement(children=children):
            result: dict[str, Value] = {}
            repeated: set[str] = set()
            for child in children:
                match child:
                    case XmlText():
                        continue
                    case XmlElement():
                        key = child.name
                        value = _element_to_value(child)
                    case _:
                        raise UnexpectedNodeError(
                            f"Unexpected node type: {type(child).__name__}"
                        )
                if key in repeated:
                    result[key].append(value)  # type: ignore[union-attr]
                elif key in result:
                    result[key] = [result[key], value]
                    repeated.add(key)
                else:
                    result[key] = value
            return result
        case XmlText(text=text):
            return text
        case _:
            raise UnexpectedNodeError(f"Unexpected node type: {type(node).__name__}")


def from_xml_document(source: str | bytes, name: str) -> Value:
    """Decode the element named ``name`` from a document.

    The element is looked up among the root's direct children first; a root that
    itself carries the name is used otherwise.

    :raises MissingElementError: If no such element exists.
    """
    root = parse_document(source)
    result = _find_child(root, name)
    if result is None and root.name == name:
        result = root
    if result is None:
        raise MissingElementError(f"Missing result element {name!r}")
    return element_to_value(result)


def from_xml_document_with_metadata(
    source: str | bytes, name: str | None
) -> dict[str, Value]:
    """Decode a query-style response envelope.

    The document looks like::

        <FooResponse>
          <FooResult>...</FooResult>
          <ResponseMetadata>...</ResponseMetadata>
        </FooResponse>

    and decodes to the fields of the result element, plus the decoded
    ``ResponseMetadata`` under ``$metadata``. Operations without output pass
    ``None`` for ``name`` and only get ``$metadata``.

    :raises MissingElementError: If the result or metadata element is absent.
    """
    root = parse_document(source)
    output: dict[str, Value] = {}
    if name is not None:
        if (result := _find_child(root, name)) is None:
            raise MissingElementError(f"Missing result element {name!r}")
        output.update(_structure_value(result))
    if (metadata := _find_child(root, RESPONSE_METADATA)) is None:
        raise MissingElementError(f"Missing {RESPONSE_METADATA} element")
    output[METADATA_KEY] = _structure_value(metadata)
    return output


def from_ec2_xml_document(source: str | bytes) -> dict[str, Value]:
    """Decode an EC2-style response envelope.

    EC2 responses carry the output members directly under the root element,
    alongside a ``requestId`` element::

        <FooResponse xmlns="...">
          <requestId>...</requestId>
          <barSet>...</barSet>
        </FooResponse>

    The request id is moved to ``$metadata`` as ``RequestId`` so the result has
    the same shape as other query responses.

    :raises MissingElementError: If the ``requestId`` element is absent.
    """
    output = _structure_value(parse_document(source))
    request_id = output.pop(EC2_REQUEST_ID, None)
    if request_id is None:
        raise MissingElementError(f"Missing {EC2_REQUEST_ID} element")
    output[METADATA_KEY] = {"RequestId": request_id}
    return output


def parse_error_info(source: str | bytes) -> XmlErrorInfo:
    """Extract the error code and message from an XML error response.

    Query, EC2 and REST XML services nest the details in an ``Error`` element at
    different depths, so the first one found in document order is used.
    """
    try:
        root = parse_document(source)
    except MalformedResponseError as e:
        logger.debug("Unable to parse XML error response: %s", e)
        return XmlErrorInfo("Unknown", "Unknown")

    code = message = request_id = None
    for element in _iter_elements(root):
        if element.name == "Error" and code is None:
            code = _child_text(element, "Code")
            message = _child_text(element, "Message")
        elif element.name in ("RequestId", "RequestID") and request_id is None:
            request_id = _text(element)
    return XmlErrorInfo(code or "Unknown", message or "Unknown", request_id)


def _structure_value(element: XmlElement) -> dict[str, Value]:
    value = element_to_value(element)
    if isinstance(value, dict):
        return value
    if isinstance(value, str) and not value.strip():
        return {}
    raise MalformedResponseError(
        f"Expected element {element.name!r} to contain child elements"
    )


def _find_child(element: XmlElement, name: str) -> XmlElement | None:
    for child in element.children:
        if isinstance(child, XmlElement) and child.name == name:
            return child
    return None


def _iter_elements(element: XmlElement) -> Iterator[XmlElement]:
    yield element
    for child in element.children:
        if isinstance(child, XmlElement):
            yield from _iter_elements(child)


def _child_text(element: XmlElement, name: str) -> str | None:
    child = _find_child(element, name)
    return _text(child) if child is not None else None


def _text(element: XmlElement) -> str:
    return "".join(c.text for c in element.children if isinstance(c, XmlText))


def _local_name(name: str) -> str:
    # ElementTree spells namespaced names as "{uri}local".
    if name.startswith("{"):
        return name.split("}", 1)[1]
    return name
