# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import Counter, OrderedDict
from collections.abc import Iterable, Iterator, Sequence
from copy import deepcopy
from dataclasses import dataclass, replace
from urllib.parse import urlunparse

import acs_sdk_signers.interfaces.http as interfaces_http

from .body import EmptyBody, RequestBody


class Field(interfaces_http.Field):
    """A name-value pair representing a single header in an HTTP Request or Response.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names are preserved for transmission.
    """

    def __init__(
        self,
        *,
        name: str,
        values: Iterable[str] | None = None,
    ):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def as_string(self, delimiter: str = ",") -> str:
        """Get delimited string of all values.

        If the ``Field`` has zero values, the empty string is returned. If the ``Field``
        has exactly one value, the value is returned unmodified. Values of a
        multi-valued ``Field`` that contain commas or double quotes are quoted.
        """
        value_count = len(self.values)
        if value_count == 0:
            return ""
        if value_count == 1:
            return self.values[0]
        return delimiter.join(quote_and_escape_field_value(val) for val in self.values)

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples where each tuple represents one
        value."""
        return [(self.name, val) for val in self.values]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, value={self.values!r})"


class Fields(interfaces_http.Fields):
    def __init__(
        self,
        initial: Iterable[interfaces_http.Field] | None = None,
        *,
        encoding: str = "utf-8",
    ):
        """Collection of header entries mapped by name.

        :param initial: Initial list of ``Field`` objects.
        :param encoding: The string encoding to be used when converting the ``Field``
        name and value from ``str`` to ``bytes`` for transmission.
        """
        init_fields = list(initial) if initial is not None else []
        init_field_names = [self._normalize_field_name(fld.name) for fld in init_fields]
        repeated = [
            name for name, count in Counter(init_field_names).items() if count > 1
        ]
        if repeated:
            raise ValueError(
                "Field names of the initial list of fields must be unique. The "
                "following normalized field names appear more than once: "
                f"{', '.join(repeated)}."
            )
        self.entries: OrderedDict[str, interfaces_http.Field] = OrderedDict(
            zip(init_field_names, init_fields)
        )
        self.encoding: str = encoding

    @classmethod
    def from_tuples(cls, items: Iterable[tuple[str, str]]) -> Fields:
        """Build a collection from ``(name, value)`` pairs, merging repeated names."""
        fields = cls()
        for name, value in items:
            if name in fields:
                fields[name].add(value)
            else:
                fields.set_field(Field(name=name, values=[value]))
        return fields

    def set_field(self, field: interfaces_http.Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        self.__setitem__(field.name, field)

    def __setitem__(self, name: str, field: interfaces_http.Field) -> None:
        """Set or override entry for a Field name."""
        normalized_name = self._normalize_field_name(name)
        normalized_field_name = self._normalize_field_name(field.name)
        if normalized_name != normalized_field_name:
            raise ValueError(
                f"Supplied key {name} does not match Field.name "
                f"provided: {normalized_field_name}"
            )
        self.entries[normalized_name] = field

    def get(
        self, key: str, default: interfaces_http.Field | None = None
    ) -> interfaces_http.Field | None:
        return self[key] if key in self else default

    def __getitem__(self, name: str) -> interfaces_http.Field:
        return self.entries[self._normalize_field_name(name)]

    def _normalize_field_name(self, name: str) -> str:
        return name.lower()

    def __eq__(self, other: object) -> bool:
        """Encoding must match.

        Entries must match in values and order.
        """
        if not isinstance(other, Fields):
            return False
        return self.encoding == other.encoding and self.entries == other.entries

    def __iter__(self) -> Iterator[interfaces_http.Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Fields({self.entries})"

    def __contains__(self, key: str) -> bool:
        return self._normalize_field_name(key) in self.entries


@dataclass(kw_only=True, frozen=True)
class URI(interfaces_http.URI):
    """Target location for an :py:class:`ACSRequest`.

    The query is carried separately on the request as ordered pairs, so it is not
    part of the URI.
    """

    scheme: str = "https"
    """For example ``https``."""

    host: str
    """The endpoint hostname, for example ``alidns.cn-hangzhou.aliyuncs.com``."""

    port: int | None = None
    """An explicit port number."""

    path: str | None = None
    """Path component of the URI, already percent-encoded.

    RPC-style APIs have no resource path and use ``/``.
    """

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``.

        ``port`` is only included if set.
        """
        if self.port is not None:
            return f"{self.host}:{self.port}"
        return self.host

    def build(self) -> str:
        """Construct URI string representation of the form
        ``{scheme}://{host}:{port}{path}``."""
        components = (self.scheme, self.netloc, self.path or "/", "", "", "")
        return urlunparse(components)


class ACSRequest(interfaces_http.Request):
    def __init__(
        self,
        *,
        destination: URI,
        method: str,
        query: Sequence[tuple[str, str]] | None = None,
        body: RequestBody | None = None,
        fields: Fields | None = None,
    ):
        """An unsent Alibaba Cloud OpenAPI request.

        :param destination: The endpoint and canonical resource path.
        :param method: The HTTP method, for example ``GET``.
        :param query: Query parameters in the order they should be transmitted.
            Repeated keys are kept on the wire.
        :param body: One of the request body variants. Defaults to no body.
        :param fields: Extra headers to transmit.
        """
        self.destination = destination
        self.method = method
        self.query: list[tuple[str, str]] = list(query) if query is not None else []
        self.body: RequestBody = body if body is not None else EmptyBody()
        self.fields = fields if fields is not None else Fields()

    def __deepcopy__(self, memo: dict[int, ACSRequest] | None = None) -> ACSRequest:
        if memo is None:
            memo = {}

        if id(self) in memo:
            return memo[id(self)]

        # the destination and body are immutable and don't need to be copied
        new_instance = self.__class__(
            destination=replace(self.destination),
            method=self.method,
            query=list(self.query),
            body=self.body,
            fields=deepcopy(self.fields, memo),
        )
        memo[id(self)] = new_instance
        return new_instance

    def __repr__(self) -> str:
        return (
            f"ACSRequest(method={self.method!r}, destination={self.destination!r}, "
            f"query={self.query!r}, body={type(self.body).__name__})"
        )


@dataclass(kw_only=True)
class ACSResponse(interfaces_http.Response):
    """A fully read HTTP response."""

    status: int
    """The HTTP status code."""

    fields: Fields
    """The response headers."""

    body: bytes = b""
    """The raw, undecoded response body."""

    reason: str | None = None
    """Optional string provided by the server explaining the status."""


def quote_and_escape_field_value(value: str) -> str:
    """Escapes and quotes a single :class:`Field` value if necessary.

    See :func:`Field.as_string` for quoting and escaping logic.
    """
    chars_to_quote = (",", '"')
    if any(char in chars_to_quote for char in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    else:
        return value
