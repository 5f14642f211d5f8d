#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
import os

from .._identity import ACSCredentialIdentity
from ..exceptions import CredentialsResolutionError
from ..interfaces.identity import ACSCredentialsIdentity, CredentialsResolver

logger = logging.getLogger(__name__)

ACCESS_KEY_ID_ENV_VAR = "ALIBABA_CLOUD_ACCESS_KEY_ID"
ACCESS_KEY_SECRET_ENV_VAR = "ALIBABA_CLOUD_ACCESS_KEY_SECRET"


class EnvironmentCredentialsResolver(CredentialsResolver):
    """Resolves Alibaba Cloud credentials from system environment variables."""

    def __init__(self) -> None:
        self._credentials: ACSCredentialsIdentity | None = None

    async def get_identity(self) -> ACSCredentialsIdentity:
        if self._credentials is not None:
            return self._credentials

        access_key_id = os.getenv(ACCESS_KEY_ID_ENV_VAR)
        access_key_secret = os.getenv(ACCESS_KEY_SECRET_ENV_VAR)

        if not access_key_id or not access_key_secret:
            raise CredentialsResolutionError(
                f"{ACCESS_KEY_ID_ENV_VAR} and {ACCESS_KEY_SECRET_ENV_VAR} are required"
            )

        logger.debug("Resolved credentials from environment variables.")
        self._credentials = ACSCredentialIdentity(
            access_key_id=access_key_id,
            access_key_secret=access_key_secret,
        )
        return self._credentials
