# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class ACSSDKWarning(UserWarning): ...


class BaseACSSDKException(Exception):
    """Top-level exception to capture SDK-related errors."""

    is_retry_safe: bool = False
    """Whether the failed call may be attempted again unchanged.

    Nothing in this package retries; the flag only lets callers tell transient
    failures apart from permanent configuration errors.
    """


class MissingExpectedParameterException(BaseACSSDKException, ValueError):
    """Some APIs require specific signing properties to be present."""


class ClockError(BaseACSSDKException):
    """The system clock could not produce a timestamp for ``x-acs-date``."""


class SigningKeyError(BaseACSSDKException, ValueError):
    """The access key secret could not be used to initialize HMAC-SHA256."""


class CredentialsResolutionError(BaseACSSDKException):
    """No usable access key pair could be found by a credentials resolver."""


class RequestBuildError(BaseACSSDKException):
    """The outbound HTTP request could not be constructed."""


class TransportError(BaseACSSDKException):
    """The HTTP request failed in flight (connection, TLS, timeout or read)."""

    is_retry_safe = True


class NonUtf8ResponseError(BaseACSSDKException):
    """The response body is not valid UTF-8 text."""
