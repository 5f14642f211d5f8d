# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass, field
from datetime import datetime

from .interfaces.identity import ACSCredentialsIdentity


@dataclass(kw_only=True)
class ACSCredentialIdentity(ACSCredentialsIdentity):
    access_key_id: str
    access_key_secret: str = field(repr=False)
    expiration: datetime | None = None
