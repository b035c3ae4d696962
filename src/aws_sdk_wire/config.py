# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from dataclasses import dataclass
from typing import Self

from .exceptions import ConfigurationError
from .identity import environment_credentials
from .interfaces.identity import CredentialsSupplier

REGION_ENV_VARS = ("AWS_REGION", "AWS_DEFAULT_REGION")


@dataclass(kw_only=True)
class ClientConfig:
    """Per-client settings shared by every call."""

    region: str
    """The region requests are scoped to, for example ``us-east-1``."""

    credentials: CredentialsSupplier
    """Called once per signed request to obtain credentials."""

    def __post_init__(self) -> None:
        if not self.region:
            raise ConfigurationError("A region is required to sign requests.")

    @classmethod
    def from_environment(cls) -> Self:
        """Build a config from ``AWS_REGION`` (or ``AWS_DEFAULT_REGION``) and the
        standard credential environment variables.

        Credentials are read lazily, on each call of the supplier.
        """
        region = next(
            (value for var in REGION_ENV_VARS if (value := os.getenv(var))), None
        )
        if region is None:
            raise ConfigurationError(
                f"No region configured. Set one of: {', '.join(REGION_ENV_VARS)}."
            )
        return cls(region=region, credentials=environment_credentials)
