# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Identity(Protocol):
    """An entity available to the client representing who the user is."""

    expiration: datetime | None = None
    """The expiration time of the identity.

    If time zone is provided, it is updated to UTC. The value must always be in UTC.
    """

    @property
    def is_expired(self) -> bool:
        """Whether the identity is expired."""
        if self.expiration is None:
            return False
        return datetime.now(tz=UTC) >= self.expiration


@runtime_checkable
class ACSCredentialsIdentity(Identity, Protocol):
    """Alibaba Cloud access key pair."""

    access_key_id: str
    """The public identifier sent in the ``Credential`` part of the signature."""

    access_key_secret: str
    """The secret used only as the HMAC-SHA256 key. It is never transmitted."""


class CredentialsResolver(Protocol):
    """Produces an access key pair on demand."""

    async def get_identity(self) -> ACSCredentialsIdentity:
        """Load the credentials.

        :raises CredentialsResolutionError: If no credentials are available.
        """
        ...
