# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping, Sequence

type Value = str | list[Value] | dict[str, Value]
"""The tagged value bridging JSON-like data and XML trees.

A string becomes element text, a list is rendered item by item onto its parent, and
a mapping becomes one child element per key.
"""

type Document = (
    Mapping[str, Document] | Sequence[Document] | str | int | float | bool | None
)
"""Any value that can be written to or read from a JSON body."""
