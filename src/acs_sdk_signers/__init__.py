# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""ACS SDK Signers provides stand-alone ACS3-HMAC-SHA256 signing for Alibaba Cloud
OpenAPI requests, for use with HTTP tools such as AioHTTP, Curl, Requests, etc."""

from __future__ import annotations

from ._http import URI, ACSRequest, ACSResponse, Field, Fields
from ._identity import ACSCredentialIdentity
from .body import BinaryBody, EmptyBody, FormDataBody, FormValue, JsonBody, RequestBody
from .signers import ACS3Signer, ACS3SigningProperties
from .utils import canonicalize_query, hmac_sha256, percent_encode, sha256_hex

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "ACS3Signer",
    "ACS3SigningProperties",
    "ACSCredentialIdentity",
    "ACSRequest",
    "ACSResponse",
    "BinaryBody",
    "EmptyBody",
    "Field",
    "Fields",
    "FormDataBody",
    "FormValue",
    "JsonBody",
    "RequestBody",
    "canonicalize_query",
    "hmac_sha256",
    "percent_encode",
    "sha256_hex",
)
