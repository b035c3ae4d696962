# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import datetime
import hmac
import logging
from collections.abc import Awaitable, Callable
from copy import deepcopy
from hashlib import sha256
from typing import TYPE_CHECKING, Required, TypedDict

from ._http import AWSRequest, Field
from .exceptions import CredentialsError
from .interfaces.identity import AWSCredentialsIdentity, CredentialsSupplier

if TYPE_CHECKING:
    from .config import ClientConfig

logger = logging.getLogger(__name__)

SIGNING_ALGORITHM: str = "AWS4-HMAC-SHA256"
SIGV4_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"
EMPTY_SHA256_HASH = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

# Methods whose payload is always treated as empty, whatever body is attached.
BODILESS_METHODS: tuple[str, ...] = ("GET", "HEAD")

type Clock = Callable[[], datetime.datetime]
"""Returns the current time as an aware datetime."""

type Signer = Callable[[AWSRequest, "ClientConfig"], Awaitable[AWSRequest]]
"""Signs a request for one service using the region and credentials of a config."""


class SigV4SigningProperties(TypedDict, total=False):
    region: Required[str]
    service: Required[str]
    date: str


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class AsyncSigV4Signer:
    """Request signer for applying the AWS Signature Version 4 algorithm."""

    def __init__(self, *, clock: Clock | None = None) -> None:
        """
        :param clock: Source of the signing time when the request carries no
            ``x-amz-date`` header and no date is given in the signing properties.
        """
        self._clock = clock if clock is not None else _utc_now

    async def sign(
        self,
        *,
        signing_properties: SigV4SigningProperties,
        request: AWSRequest,
        credentials: CredentialsSupplier,
    ) -> AWSRequest:
        """Return a signed copy of ``request``; the request itself is not modified.

        :param signing_properties: The region and service the signature is scoped
            to, and optionally a fixed ``date``.
        :param request: The request to sign.
        :param credentials: Supplier of the credentials to sign with. It is called
            exactly once, and anything it raises propagates unchanged.
        """
        if request.method.upper() in BODILESS_METHODS:
            payload = None
            payload_hash = EMPTY_SHA256_HASH
        else:
            payload = await request.consume_body_async()
            payload_hash = sha256(payload).hexdigest()

        identity = await credentials()
        await self._validate_identity(identity=identity)

        new_request = await self._generate_new_request(
            request=request, payload=payload
        )
        new_signing_properties = await self._apply_required_fields(
            request=new_request,
            signing_properties=signing_properties,
            identity=identity,
            payload_hash=payload_hash,
        )

        canonical_request = await self.canonical_request(
            request=new_request, payload_hash=payload_hash
        )
        string_to_sign = await self.string_to_sign(
            canonical_request=canonical_request,
            signing_properties=new_signing_properties,
        )
        logger.debug("StringToSign:\n%s", string_to_sign)
        signature = await self._signature(
            string_to_sign=string_to_sign,
            secret_key=identity.secret_access_key,
            signing_properties=new_signing_properties,
        )

        signed_headers = await self._signed_headers(request=new_request)
        logger.debug("SignedHeaders: %s", ";".join(signed_headers))
        credential_scope = await self._scope(
            signing_properties=new_signing_properties
        )
        credential = f"{identity.access_key_id}/{credential_scope}"
        authorization = await self.generate_authorization_field(
            credential=credential,
            signed_headers=signed_headers,
            signature=signature,
        )
        new_request.fields.set_field(authorization)
        return new_request

    async def generate_authorization_field(
        self, *, credential: str, signed_headers: list[str], signature: str
    ) -> Field:
        """Build the ``Authorization`` field.

        :param credential: ``<access_key>/<date>/<region>/<service>/aws4_request``
        :param signed_headers: Sorted, lower-cased names of the signed fields.
        :param signature: Hex HMAC of the string to sign.
        """
        auth_str = (
            f"{SIGNING_ALGORITHM} Credential={credential},"
            f"SignedHeaders={';'.join(signed_headers)},Signature={signature}"
        )
        return Field(name="Authorization", values=[auth_str])

    async def canonical_request(self, *, request: AWSRequest, payload_hash: str) -> str:
        """Lay out the parts of a request that the signature covers.

        Comparing this string between client and service is the quickest way to
        find why a signature was rejected. Its lines are:

            <HTTPMethod>\n
            <Path>\n
            <RawQueryString>\n
            <CanonicalHeaders>\n
            <SignedHeaders>\n
            <HashedPayload>

        Every header on the request is signed. Header values are trimmed but
        otherwise used verbatim, several values of one header joined with ``", "``.

        :param request: A request carrying every header to sign.
        :param payload_hash: Lowercase hex SHA-256 digest of the payload.
        """
        canonical_fields = await self._format_canonical_fields(request=request)
        signed_headers = await self._signed_headers(request=request)
        return (
            f"{request.method.upper()}\n"
            f"{request.destination.path or '/'}\n"
            f"{request.destination.query or ''}\n"
            f"{canonical_fields}\n"
            f"{';'.join(signed_headers)}\n"
            f"{payload_hash}"
        )

    async def string_to_sign(
        self,
        *,
        canonical_request: str,
        signing_properties: SigV4SigningProperties,
    ) -> str:
        """Join the algorithm name, the signing date, the credential scope and the
        SHA-256 of the canonical request, one per line.

        :param canonical_request: Output of :py:meth:`canonical_request`.
        :param signing_properties: Properties carrying the resolved ``date``.
        """
        scope = await self._scope(signing_properties=signing_properties)
        return (
            f"{SIGNING_ALGORITHM}\n"
            f"{signing_properties['date']}\n"
            f"{scope}\n"
            f"{sha256(canonical_request.encode()).hexdigest()}"
        )

    async def _signature(
        self,
        *,
        string_to_sign: str,
        secret_key: str,
        signing_properties: SigV4SigningProperties,
    ) -> str:
        """HMAC the string to sign with a key derived for this day, region and
        service."""
        # The key is an HMAC chain seeded with "AWS4" + secret over
        # date, region, service and the literal "aws4_request".
        key = f"AWS4{secret_key}".encode()
        for part in (
            signing_properties["date"][:8],
            signing_properties["region"],
            signing_properties["service"],
            "aws4_request",
        ):
            key = await self._hash(key=key, value=part)
        signature = await self._hash(key=key, value=string_to_sign)
        return signature.hex()

    async def _hash(self, key: bytes, value: str) -> bytes:
        return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()

    async def _validate_identity(self, *, identity: AWSCredentialsIdentity) -> None:
        """Reject identities that can't produce a valid signature."""
        if not isinstance(identity, AWSCredentialsIdentity):  # pyright: ignore
            raise CredentialsError(
                "Received unexpected value from the credentials supplier. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        if not identity.access_key_id or not identity.secret_access_key:
            raise CredentialsError(
                "The credentials supplier returned credentials without an access "
                "key id or secret access key."
            )
        if identity.is_expired:
            raise CredentialsError(f"The credentials expired at {identity.expiration}.")

    async def _generate_new_request(
        self, *, request: AWSRequest, payload: bytes | None
    ) -> AWSRequest:
        # The original body may be a drained stream by now.
        new_request = deepcopy(request)
        new_request.body = payload
        return new_request

    async def _apply_required_fields(
        self,
        *,
        request: AWSRequest,
        signing_properties: SigV4SigningProperties,
        identity: AWSCredentialsIdentity,
        payload_hash: str,
    ) -> SigV4SigningProperties:
        new_signing_properties = SigV4SigningProperties(**signing_properties)

        request.fields.set_field(
            Field(name="host", values=[request.destination.host_header])
        )
        if (date_field := request.fields.get("x-amz-date")) is not None:
            date = date_field.as_string()
        elif "date" in signing_properties:
            date = signing_properties["date"]
        else:
            date = self._clock().astimezone(datetime.UTC).strftime(
                SIGV4_TIMESTAMP_FORMAT
            )
        new_signing_properties["date"] = date
        request.fields.set_field(Field(name="x-amz-date", values=[date]))
        request.fields.set_field(
            Field(name="x-amz-content-sha256", values=[payload_hash])
        )
        if identity.session_token:
            request.fields.set_field(
                Field(name="x-amz-security-token", values=[identity.session_token])
            )
        return new_signing_properties

    async def _scope(self, signing_properties: SigV4SigningProperties) -> str:
        # <YYYYMMDD>/<region>/<service>/aws4_request
        return "/".join(
            (
                signing_properties["date"][:8],
                signing_properties["region"],
                signing_properties["service"],
                "aws4_request",
            )
        )

    async def _signed_headers(self, *, request: AWSRequest) -> list[str]:
        return sorted(field.name.lower() for field in request.fields)

    async def _format_canonical_fields(self, *, request: AWSRequest) -> str:
        # Multiple values of one field are joined unquoted on a single line and
        # never merged with other fields.
        entries = sorted(
            (
                (field.name.lower(), ", ".join(field.values).strip())
                for field in request.fields
            ),
            key=lambda entry: entry[0],
        )
        return "".join(f"{name}:{value}\n" for name, value in entries)


async def authenticate(
    request: AWSRequest,
    client_config: "ClientConfig",
    service_name: str,
    *,
    clock: Clock | None = None,
) -> AWSRequest:
    """Sign a request for ``service_name`` with the region and credentials of
    ``client_config``.

    The input request is left untouched; a signed copy is returned.
    """
    signer = AsyncSigV4Signer(clock=clock)
    return await signer.sign(
        signing_properties=SigV4SigningProperties(
            region=client_config.region, service=service_name
        ),
        request=request,
        credentials=client_config.credentials,
    )


def create_signer(service_name: str) -> Signer:
    """Create a :py:data:`Signer` bound to one service's signing name."""

    async def signer(request: AWSRequest, client_config: "ClientConfig") -> AWSRequest:
        return await authenticate(request, client_config, service_name)

    return signer
