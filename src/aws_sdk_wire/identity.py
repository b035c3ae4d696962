# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from dataclasses import dataclass
from datetime import UTC, datetime

from .exceptions import CredentialsError
from .interfaces.identity import AWSCredentialsIdentity, CredentialsSupplier


@dataclass(kw_only=True)
class AWSCredentialIdentity(AWSCredentialsIdentity):
    """Static AWS credentials as handed out by a credentials supplier."""

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None
    expiration: datetime | None = None

    def __post_init__(self) -> None:
        # Naive expirations are read as UTC so they compare against aware times.
        if self.expiration is not None:
            if self.expiration.tzinfo is None:
                self.expiration = self.expiration.replace(tzinfo=UTC)
            else:
                self.expiration = self.expiration.astimezone(UTC)


def static_credentials(identity: AWSCredentialsIdentity) -> CredentialsSupplier:
    """Create a supplier that always returns the given credentials."""

    async def supplier() -> AWSCredentialsIdentity:
        return identity

    return supplier


async def environment_credentials() -> AWSCredentialsIdentity:
    """Resolve AWS credentials from system environment variables.

    The environment is read on every call, so rotated values are picked up.
    """
    access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
    secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
    session_token = os.getenv("AWS_SESSION_TOKEN")

    if not access_key_id or not secret_access_key:
        raise CredentialsError(
            "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are required"
        )

    return AWSCredentialIdentity(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token or None,
    )
