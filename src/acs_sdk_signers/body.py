# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Request body variants accepted by Alibaba Cloud OpenAPI operations.

Each variant knows three things about itself:

* ``content``: the text that is hashed into ``x-acs-content-sha256``.
* ``payload``: the bytes that are actually transmitted.
* ``content_type``: the ``Content-Type`` to send, or ``None`` for no header.
"""

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from .utils import percent_encode

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
BINARY_CONTENT_TYPE = "application/octet-stream"

FormValue: TypeAlias = str | Sequence[str] | Mapping[str, str]
"""A single form value, a repeated form value, or a nested map of form values."""


@dataclass(frozen=True)
class JsonBody:
    """A structured body sent as a compact JSON document."""

    data: Mapping[str, Any] = field(default_factory=dict[str, Any])

    @property
    def content(self) -> str:
        return json.dumps(
            self.data, separators=(",", ":"), ensure_ascii=False, sort_keys=True
        )

    @property
    def payload(self) -> bytes:
        return self.content.encode("utf-8")

    @property
    def content_type(self) -> str | None:
        return JSON_CONTENT_TYPE


@dataclass(frozen=True)
class FormDataBody:
    """A body sent as ``application/x-www-form-urlencoded``.

    A list value repeats its key once per element. A nested mapping contributes
    one segment per nested pair, named by the nested key.
    """

    data: Mapping[str, FormValue] = field(default_factory=dict[str, FormValue])

    @property
    def content(self) -> str:
        return "&".join(self._segments())

    @property
    def payload(self) -> bytes:
        return self.content.encode("utf-8")

    @property
    def content_type(self) -> str | None:
        return FORM_CONTENT_TYPE if self.content else None

    def _segments(self) -> Iterator[str]:
        for key, value in self.data.items():
            if isinstance(value, str):
                yield f"{percent_encode(key)}={percent_encode(value)}"
            elif isinstance(value, Mapping):
                for nested_key, nested_value in value.items():
                    yield f"{percent_encode(nested_key)}={percent_encode(nested_value)}"
            else:
                for item in value:
                    yield f"{percent_encode(key)}={percent_encode(item)}"


@dataclass(frozen=True)
class BinaryBody:
    """Opaque bytes, such as an uploaded file.

    The hashed ``content`` is empty unless the signer is told to sign binary
    payloads; see ``ACS3SigningProperties.sign_binary_payload``.
    """

    data: bytes = b""

    @property
    def content(self) -> str:
        return ""

    @property
    def payload(self) -> bytes:
        return self.data

    @property
    def content_type(self) -> str | None:
        return BINARY_CONTENT_TYPE


@dataclass(frozen=True)
class EmptyBody:
    """No request body."""

    @property
    def content(self) -> str:
        return ""

    @property
    def payload(self) -> bytes:
        return b""

    @property
    def content_type(self) -> str | None:
        return None


RequestBody: TypeAlias = JsonBody | FormDataBody | BinaryBody | EmptyBody
