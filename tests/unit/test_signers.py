# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import copy
import re
import typing
from datetime import UTC, datetime

import pytest
from acs_sdk_signers import (
    URI,
    ACS3Signer,
    ACS3SigningProperties,
    ACSCredentialIdentity,
    ACSRequest,
    BinaryBody,
    EmptyBody,
    Field,
    Fields,
    JsonBody,
)
from acs_sdk_signers.exceptions import (
    ACSSDKWarning,
    ClockError,
    MissingExpectedParameterException,
    SigningKeyError,
)
from acs_sdk_signers.signers import SIGNED_HEADERS
from acs_sdk_signers.utils import EMPTY_SHA256_HASH, sha256_hex
from freezegun import freeze_time

ACS3_RE = re.compile(
    r"ACS3-HMAC-SHA256 "
    r"Credential=(?P<access_key>\w+),"
    r"SignedHeaders=host;x-acs-action;x-acs-content-sha256;x-acs-date;"
    r"x-acs-signature-nonce;x-acs-version,"
    r"Signature=(?P<signature>[0-9a-f]{64})$"
)


@pytest.fixture(scope="module")
def acs_identity() -> ACSCredentialIdentity:
    return ACSCredentialIdentity(
        access_key_id="LTAI123456",
        access_key_secret="EXAMPLE1234SECRET",
    )


@pytest.fixture(scope="module")
def signing_properties() -> ACS3SigningProperties:
    return ACS3SigningProperties(action="DescribeDomainRecords", version="2015-01-09")


@pytest.fixture
def acs_request() -> ACSRequest:
    return ACSRequest(
        destination=URI(host="alidns.cn-hangzhou.aliyuncs.com", path="/"),
        method="GET",
        query=[("DomainName", "example.com"), ("PageSize", "100")],
        body=EmptyBody(),
        fields=Fields(),
    )


class TestACS3Signer:
    ACS3_SIGNER = ACS3Signer()

    def test_sign(
        self,
        acs_identity: ACSCredentialIdentity,
        acs_request: ACSRequest,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        signed_request = self.ACS3_SIGNER.sign(
            signing_properties=signing_properties,
            request=acs_request,
            identity=acs_identity,
        )
        assert isinstance(signed_request, ACSRequest)
        assert signed_request is not acs_request
        assert "authorization" in signed_request.fields
        authorization_field = signed_request.fields["authorization"]
        match = ACS3_RE.match(authorization_field.as_string())
        assert match is not None
        assert match.group("access_key") == "LTAI123456"

    def test_sign_applies_signed_headers(
        self,
        acs_identity: ACSCredentialIdentity,
        acs_request: ACSRequest,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        signed_request = self.ACS3_SIGNER.sign(
            signing_properties=signing_properties,
            request=acs_request,
            identity=acs_identity,
        )
        fields = signed_request.fields
        for name in SIGNED_HEADERS:
            assert name in fields
        assert fields["Host"].as_string() == "alidns.cn-hangzhou.aliyuncs.com"
        assert fields["x-acs-action"].as_string() == "DescribeDomainRecords"
        assert fields["x-acs-version"].as_string() == "2015-01-09"
        assert fields["x-acs-content-sha256"].as_string() == EMPTY_SHA256_HASH
        assert re.fullmatch(
            r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z",
            fields["x-acs-date"].as_string(),
        )
        nonce = fields["x-acs-signature-nonce"].as_string()
        assert re.fullmatch(r"[A-Z0-9]{32}", nonce)

    def test_sign_doesnt_modify_original_request(
        self,
        acs_identity: ACSCredentialIdentity,
        acs_request: ACSRequest,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        original_request = copy.deepcopy(acs_request)
        signed_request = self.ACS3_SIGNER.sign(
            signing_properties=signing_properties,
            request=acs_request,
            identity=acs_identity,
        )
        assert signed_request is not acs_request
        assert acs_request.fields == original_request.fields
        assert acs_request.query == original_request.query
        assert signed_request.fields != acs_request.fields

    def test_sign_doesnt_modify_signing_properties(
        self,
        acs_identity: ACSCredentialIdentity,
        acs_request: ACSRequest,
    ) -> None:
        properties = ACS3SigningProperties(
            action="QueryDomainList", version="2018-01-29"
        )
        self.ACS3_SIGNER.sign(
            signing_properties=properties, request=acs_request, identity=acs_identity
        )
        assert properties == {"action": "QueryDomainList", "version": "2018-01-29"}

    def test_each_signature_uses_a_new_nonce(
        self,
        acs_identity: ACSCredentialIdentity,
        acs_request: ACSRequest,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        nonces = {
            self.ACS3_SIGNER.sign(
                signing_properties=signing_properties,
                request=acs_request,
                identity=acs_identity,
            )
            .fields["x-acs-signature-nonce"]
            .as_string()
            for _ in range(5)
        }
        assert len(nonces) == 5

    def test_existing_fields_are_kept(
        self,
        acs_identity: ACSCredentialIdentity,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        request = ACSRequest(
            destination=URI(host="example.com"),
            method="GET",
            fields=Fields([Field(name="Accept", values=["application/json"])]),
        )
        signed_request = self.ACS3_SIGNER.sign(
            signing_properties=signing_properties,
            request=request,
            identity=acs_identity,
        )
        assert signed_request.fields["accept"].as_string() == "application/json"

    def test_json_body_is_hashed(
        self,
        acs_identity: ACSCredentialIdentity,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        body = JsonBody({"PageNum": "1", "PageSize": "10"})
        request = ACSRequest(
            destination=URI(host="example.com"), method="POST", body=body
        )
        signed_request = self.ACS3_SIGNER.sign(
            signing_properties=signing_properties,
            request=request,
            identity=acs_identity,
        )
        assert signed_request.fields["x-acs-content-sha256"].as_string() == sha256_hex(
            '{"PageNum":"1","PageSize":"10"}'
        )

    def test_binary_body_is_signed_as_empty_payload(
        self,
        acs_identity: ACSCredentialIdentity,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        request = ACSRequest(
            destination=URI(host="example.com"),
            method="POST",
            body=BinaryBody(b"\x00\x01binary"),
        )
        with pytest.warns(ACSSDKWarning):
            signed_request = self.ACS3_SIGNER.sign(
                signing_properties=signing_properties,
                request=request,
                identity=acs_identity,
            )
        payload_hash = signed_request.fields["x-acs-content-sha256"].as_string()
        assert payload_hash == EMPTY_SHA256_HASH
        assert signed_request.body.payload == b"\x00\x01binary"

    def test_binary_body_payload_signing(
        self,
        acs_identity: ACSCredentialIdentity,
    ) -> None:
        request = ACSRequest(
            destination=URI(host="example.com"),
            method="POST",
            body=BinaryBody(b"\x00\x01binary"),
        )
        signed_request = self.ACS3_SIGNER.sign(
            signing_properties=ACS3SigningProperties(
                action="RecognizeGeneral",
                version="2021-07-07",
                sign_binary_payload=True,
            ),
            request=request,
            identity=acs_identity,
        )
        payload_hash = signed_request.fields["x-acs-content-sha256"].as_string()
        assert payload_hash == sha256_hex(b"\x00\x01binary")

    @typing.no_type_check
    def test_sign_with_invalid_identity(
        self, acs_request: ACSRequest, signing_properties: ACS3SigningProperties
    ) -> None:
        """Ignore typing as we're testing an invalid input state."""
        identity = object()
        assert not isinstance(identity, ACSCredentialIdentity)
        with pytest.raises(ValueError):
            self.ACS3_SIGNER.sign(
                signing_properties=signing_properties,
                request=acs_request,
                identity=identity,
            )

    def test_sign_with_expired_identity(
        self, acs_request: ACSRequest, signing_properties: ACS3SigningProperties
    ) -> None:
        identity = ACSCredentialIdentity(
            access_key_id="LTAI123456",
            access_key_secret="EXAMPLE1234SECRET",
            expiration=datetime(1970, 1, 1, tzinfo=UTC),
        )
        with pytest.raises(ValueError):
            self.ACS3_SIGNER.sign(
                signing_properties=signing_properties,
                request=acs_request,
                identity=identity,
            )

    def test_sign_with_unusable_secret(
        self, acs_request: ACSRequest, signing_properties: ACS3SigningProperties
    ) -> None:
        identity = ACSCredentialIdentity(
            access_key_id="LTAI123456", access_key_secret="\udcff"
        )
        with pytest.raises(SigningKeyError):
            self.ACS3_SIGNER.sign(
                signing_properties=signing_properties,
                request=acs_request,
                identity=identity,
            )

    @typing.no_type_check
    @pytest.mark.parametrize("missing", ["action", "version"])
    def test_sign_without_required_property(
        self,
        acs_identity: ACSCredentialIdentity,
        acs_request: ACSRequest,
        missing: str,
    ) -> None:
        properties = {"action": "QueryDomainList", "version": "2018-01-29"}
        del properties[missing]
        with pytest.raises(MissingExpectedParameterException):
            self.ACS3_SIGNER.sign(
                signing_properties=properties,
                request=acs_request,
                identity=acs_identity,
            )

    @freeze_time("1969-07-20 20:17:40")
    def test_sign_with_clock_before_epoch(
        self,
        acs_identity: ACSCredentialIdentity,
        acs_request: ACSRequest,
        signing_properties: ACS3SigningProperties,
    ) -> None:
        with pytest.raises(ClockError):
            self.ACS3_SIGNER.sign(
                signing_properties=signing_properties,
                request=acs_request,
                identity=acs_identity,
            )

    def test_canonical_request_requires_signed_fields(
        self, acs_request: ACSRequest
    ) -> None:
        with pytest.raises(MissingExpectedParameterException):
            self.ACS3_SIGNER.canonical_request(request=acs_request)
