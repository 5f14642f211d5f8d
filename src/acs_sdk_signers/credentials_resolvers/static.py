#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from ..interfaces.identity import ACSCredentialsIdentity, CredentialsResolver


class StaticCredentialsResolver(CredentialsResolver):
    """Resolve a fixed access key pair supplied by the caller."""

    def __init__(self, *, credentials: ACSCredentialsIdentity) -> None:
        self._credentials = credentials

    async def get_identity(self) -> ACSCredentialsIdentity:
        return self._credentials
