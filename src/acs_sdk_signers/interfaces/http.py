# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..body import RequestBody


class Field(Protocol):
    """A name-value pair representing a single header in a request or response.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names may be normalized but should be preserved for accuracy during
    transmission.
    """

    name: str
    values: list[str]

    def add(self, value: str) -> None:
        """Append a value to a field."""
        ...

    def as_string(self, delimiter: str = ",") -> str:
        """Serialize the ``Field``'s values into a single line string."""
        ...

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples where each tuple represents one
        value."""
        ...


class Fields(Protocol):
    """Mapping of request or response headers keyed by normalized field name."""

    entries: OrderedDict[str, Field]
    encoding: str = "utf-8"

    def set_field(self, field: Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        ...

    def __setitem__(self, name: str, field: Field) -> None: ...

    def __getitem__(self, name: str) -> Field: ...

    def __iter__(self) -> Iterator[Field]: ...

    def __len__(self) -> int: ...

    def __contains__(self, key: str) -> bool: ...


@runtime_checkable
class URI(Protocol):
    """Target location for a :py:class:`Request`."""

    scheme: str
    """For example ``https``."""

    host: str
    """The hostname, for example ``dns.aliyuncs.com``."""

    port: int | None
    """An explicit port number."""

    path: str | None
    """Path component of the URI, already percent-encoded."""

    def build(self) -> str:
        """Construct URI string representation of the form
        ``{scheme}://{host}:{port}{path}``."""
        ...

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``"""
        ...


class Request(Protocol):
    """An unsent Alibaba Cloud OpenAPI request."""

    destination: URI
    method: str
    query: Sequence[tuple[str, str]]
    body: RequestBody
    fields: Fields


class Response(Protocol):
    """A fully read HTTP response."""

    status: int
    fields: Fields
    body: bytes
    reason: str | None
