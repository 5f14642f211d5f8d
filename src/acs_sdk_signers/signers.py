# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import datetime
import logging
import warnings
from copy import deepcopy
from typing import Required, TypedDict

from ._http import ACSRequest, Field
from .body import BinaryBody
from .exceptions import ACSSDKWarning, ClockError, MissingExpectedParameterException
from .interfaces.identity import ACSCredentialsIdentity
from .utils import canonicalize_query, generate_nonce, hmac_sha256, sha256_hex

logger = logging.getLogger(__name__)

SIGNING_ALGORITHM: str = "ACS3-HMAC-SHA256"
ACS3_TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"

# Order matters: it is both the canonical header order and the SignedHeaders list.
SIGNED_HEADERS: tuple[str, ...] = (
    "host",
    "x-acs-action",
    "x-acs-content-sha256",
    "x-acs-date",
    "x-acs-signature-nonce",
    "x-acs-version",
)


class ACS3SigningProperties(TypedDict, total=False):
    action: Required[str]
    version: Required[str]
    date: str
    nonce: str
    sign_binary_payload: bool


class ACS3Signer:
    """Request signer for applying the Alibaba Cloud ACS3-HMAC-SHA256 algorithm."""

    def sign(
        self,
        *,
        signing_properties: ACS3SigningProperties,
        request: ACSRequest,
        identity: ACSCredentialsIdentity,
    ) -> ACSRequest:
        """Generate and apply an ACS3 signature to a copy of the supplied request.

        :param signing_properties: ACS3SigningProperties naming the API action and
            version, and optionally pinning the date and nonce.
        :param request: An ACSRequest to sign prior to sending to the service.
        :param identity: The access key pair to sign with.
        """
        # Copy and prepopulate any missing values in the
        # supplied request and signing properties.
        self._validate_identity(identity=identity)
        new_signing_properties = self._normalize_signing_properties(
            signing_properties=signing_properties
        )
        new_request = self._generate_new_request(request=request)
        self._apply_required_fields(
            request=new_request, signing_properties=new_signing_properties
        )

        # Construct core signing components
        canonical_request = self.canonical_request(request=new_request)
        string_to_sign = self.string_to_sign(canonical_request=canonical_request)
        signature = self._signature(
            string_to_sign=string_to_sign, secret_key=identity.access_key_secret
        )

        authorization = self.generate_authorization_field(
            access_key_id=identity.access_key_id,
            signed_headers=list(SIGNED_HEADERS),
            signature=signature,
        )
        new_request.fields.set_field(authorization)
        return new_request

    def generate_authorization_field(
        self, *, access_key_id: str, signed_headers: list[str], signature: str
    ) -> Field:
        """Generate the `Authorization` field.

        :param access_key_id:
            The public half of the access key pair.
        :param signed_headers:
            A list of the field names used in signing.
        :param signature:
            Hex HMAC-SHA256 of the string to sign.
        """
        signed_headers_str = ";".join(signed_headers)
        auth_str = (
            f"{SIGNING_ALGORITHM} Credential={access_key_id},"
            f"SignedHeaders={signed_headers_str},Signature={signature}"
        )
        return Field(name="Authorization", values=[auth_str])

    def canonical_request(self, *, request: ACSRequest) -> str:
        """The canonical request is a standardized string laying out the components used
        in the ACS3 signing algorithm. This is useful to quickly compare inputs to find
        signature mismatches and unintended variances.

        The canonical request is defined as:
            <HTTPMethod>\n
            <CanonicalURI>\n
            <CanonicalQueryString>\n
            <CanonicalHeaders>\n
            \n
            <SignedHeaders>\n
            <HashedPayload>

        All six signed headers must already be present on the request.

        :param request:
            An ACSRequest to use for generating an ACS3 signature.
        """
        canonical_fields = self._normalize_signing_fields(request=request)
        canonical_request = (
            f"{request.method.upper()}\n"
            f"{self._format_canonical_path(path=request.destination.path)}\n"
            f"{canonicalize_query(request.query)}\n"
            f"{self._format_canonical_fields(fields=canonical_fields)}\n"
            "\n"
            f"{';'.join(canonical_fields)}\n"
            f"{canonical_fields['x-acs-content-sha256']}"
        )
        logger.debug("Canonical request:\n%s", canonical_request)
        return canonical_request

    def string_to_sign(self, *, canonical_request: str) -> str:
        """The string to sign is the algorithm identifier followed by the hex SHA-256
        of the canonical request:
            Algorithm \n
            HashedCanonicalRequest

        :param canonical_request:
            String generated from the `canonical_request` method.
        """
        string_to_sign = f"{SIGNING_ALGORITHM}\n{sha256_hex(canonical_request)}"
        logger.debug("String to sign:\n%s", string_to_sign)
        return string_to_sign

    def _signature(self, *, string_to_sign: str, secret_key: str) -> str:
        """Sign the string to sign.

        There is no derived signing key. The secret itself is the HMAC key.
        """
        return hmac_sha256(key=secret_key, message=string_to_sign).hex()

    def _validate_identity(self, *, identity: ACSCredentialsIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, ACSCredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"ACSCredentialIdentity but received {type(identity)}."
            )
        elif identity.is_expired:
            raise ValueError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )

    def _normalize_signing_properties(
        self, *, signing_properties: ACS3SigningProperties
    ) -> ACS3SigningProperties:
        for required in ("action", "version"):
            if not signing_properties.get(required):
                raise MissingExpectedParameterException(
                    f"Cannot sign a request without '{required}' in the "
                    "signing_properties."
                )
        # Create copy of signing properties to avoid mutating the original
        new_signing_properties = ACS3SigningProperties(**signing_properties)
        if "date" not in new_signing_properties:
            new_signing_properties["date"] = self._current_timestamp()
        if "nonce" not in new_signing_properties:
            new_signing_properties["nonce"] = generate_nonce()
        return new_signing_properties

    def _current_timestamp(self) -> str:
        date_obj = datetime.datetime.now(datetime.UTC)
        if date_obj.timestamp() < 0:
            raise ClockError(
                f"System clock reads {date_obj.isoformat()}, which is before the "
                "Unix epoch."
            )
        return date_obj.strftime(ACS3_TIMESTAMP_FORMAT)

    def _generate_new_request(self, *, request: ACSRequest) -> ACSRequest:
        return deepcopy(request)

    def _apply_required_fields(
        self, *, request: ACSRequest, signing_properties: ACS3SigningProperties
    ) -> None:
        assert "date" in signing_properties
        assert "nonce" in signing_properties
        payload_hash = self._compute_payload_hash(
            request=request, signing_properties=signing_properties
        )
        for name, value in (
            ("Host", request.destination.netloc),
            ("x-acs-action", signing_properties["action"]),
            ("x-acs-version", signing_properties["version"]),
            ("x-acs-date", signing_properties["date"]),
            ("x-acs-signature-nonce", signing_properties["nonce"]),
            ("x-acs-content-sha256", payload_hash),
        ):
            request.fields.set_field(Field(name=name, values=[value]))

    def _compute_payload_hash(
        self, *, request: ACSRequest, signing_properties: ACS3SigningProperties
    ) -> str:
        body = request.body
        if isinstance(body, BinaryBody) and body.data:
            if signing_properties.get("sign_binary_payload", False):
                return sha256_hex(body.data)
            warnings.warn(
                "Binary request bodies are signed with the hash of an empty "
                "payload. Set sign_binary_payload to hash the transmitted bytes.",
                ACSSDKWarning,
            )
        return sha256_hex(body.content)

    def _normalize_signing_fields(self, *, request: ACSRequest) -> dict[str, str]:
        missing = [name for name in SIGNED_HEADERS if name not in request.fields]
        if missing:
            raise MissingExpectedParameterException(
                "Cannot build a canonical request without the following fields: "
                f"{', '.join(missing)}"
            )
        return {name: request.fields[name].as_string() for name in SIGNED_HEADERS}

    def _format_canonical_path(self, *, path: str | None) -> str:
        if not path:
            return "/"
        return path

    def _format_canonical_fields(self, *, fields: dict[str, str]) -> str:
        return "\n".join(f"{key}:{value}" for key, value in fields.items())
