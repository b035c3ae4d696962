# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Identity(Protocol):
    """Who the caller is, possibly only for a limited time."""

    expiration: datetime | None = None
    """When the identity stops being valid, in UTC. None means it never expires."""

    @property
    def is_expired(self) -> bool:
        """Whether ``expiration`` has passed."""
        return self.expiration is not None and datetime.now(tz=UTC) >= self.expiration


@runtime_checkable
class AWSCredentialsIdentity(Identity, Protocol):
    """An access key pair, optionally scoped to a session."""

    access_key_id: str
    """Public half of the key pair, sent in the credential scope."""

    secret_access_key: str
    """Private half of the key pair, used only to derive signing keys."""

    session_token: str | None = None
    """Token of temporary credentials, sent as ``x-amz-security-token``."""


type CredentialsSupplier = Callable[[], Awaitable[AWSCredentialsIdentity]]
"""A zero-argument coroutine function returning fresh credentials.

It is invoked once per signing call and may perform I/O. Anything it raises is
propagated to the caller unchanged.
"""
