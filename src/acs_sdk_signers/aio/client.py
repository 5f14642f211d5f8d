#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Self

from .._http import URI, ACSRequest
from .._identity import ACSCredentialIdentity
from ..body import EmptyBody, RequestBody
from ..credentials_resolvers import EnvironmentCredentialsResolver
from ..interfaces.identity import ACSCredentialsIdentity, CredentialsResolver
from ..signers import ACS3Signer, ACS3SigningProperties
from . import HTTPClient, read_response
from .aiohttp import AIOHTTPClient

logger = logging.getLogger(__name__)


async def call_api(
    *,
    http_client: HTTPClient,
    method: str,
    host: str,
    canonical_uri: str,
    query_params: Sequence[tuple[str, str]],
    action: str,
    version: str,
    body: RequestBody,
    access_key_id: str,
    access_key_secret: str,
) -> str:
    """Sign and send a single OpenAPI call, returning the response body as text.

    The response text is returned whatever the status code; interpreting error
    payloads is up to the caller.

    :param http_client: The client used to send the request.
    :param method: HTTP method, for example ``GET`` or ``POST``.
    :param host: Endpoint host, for example ``alidns.cn-hangzhou.aliyuncs.com``.
    :param canonical_uri: Percent-encoded resource path. ``/`` for RPC-style APIs.
    :param query_params: Query pairs, sent in this order.
    :param action: API name sent as ``x-acs-action``.
    :param version: API version sent as ``x-acs-version``.
    :param body: Request body variant.
    :param access_key_id: The public half of the access key pair.
    :param access_key_secret: The secret half, used only to sign.
    """
    return await _call(
        http_client=http_client,
        signer=ACS3Signer(),
        request=ACSRequest(
            destination=URI(host=host, path=canonical_uri),
            method=method,
            query=query_params,
            body=body,
        ),
        signing_properties=ACS3SigningProperties(action=action, version=version),
        identity=ACSCredentialIdentity(
            access_key_id=access_key_id, access_key_secret=access_key_secret
        ),
    )


async def _call(
    *,
    http_client: HTTPClient,
    signer: ACS3Signer,
    request: ACSRequest,
    signing_properties: ACS3SigningProperties,
    identity: ACSCredentialsIdentity,
) -> str:
    signed_request = signer.sign(
        signing_properties=signing_properties, request=request, identity=identity
    )
    response = await http_client.send(request=signed_request)
    status, text = read_response(response)
    logger.debug("%s returned status %s", signing_properties["action"], status)
    return text


class ACSClient:
    """Client for calling Alibaba Cloud OpenAPI operations.

    Holds an HTTP client and a credentials resolver; every call is otherwise
    independent, so one client may serve concurrent calls.
    """

    def __init__(
        self,
        *,
        http_client: HTTPClient | None = None,
        credentials_resolver: CredentialsResolver | None = None,
        signer: ACS3Signer | None = None,
    ) -> None:
        """
        :param http_client: Client used to send requests. Defaults to an
            :py:class:`AIOHTTPClient` owned, and closed, by this client.
        :param credentials_resolver: Source of the access key pair. Defaults to
            the ``ALIBABA_CLOUD_ACCESS_KEY_ID`` and ``ALIBABA_CLOUD_ACCESS_KEY_SECRET``
            environment variables.
        :param signer: Signer to apply to each request.
        """
        self._owned_client: AIOHTTPClient | None = None
        if http_client is None:
            http_client = self._owned_client = AIOHTTPClient()
        self._http_client = http_client
        self._credentials_resolver = (
            credentials_resolver or EnvironmentCredentialsResolver()
        )
        self._signer = signer or ACS3Signer()

    async def call(
        self,
        *,
        method: str,
        host: str,
        action: str,
        version: str,
        canonical_uri: str = "/",
        query_params: Sequence[tuple[str, str]] = (),
        body: RequestBody | None = None,
    ) -> str:
        """Sign and send a single OpenAPI call, returning the response body as text.

        See :py:func:`call_api` for the meaning of each parameter.
        """
        identity = await self._credentials_resolver.get_identity()
        return await _call(
            http_client=self._http_client,
            signer=self._signer,
            request=ACSRequest(
                destination=URI(host=host, path=canonical_uri),
                method=method,
                query=query_params,
                body=body or EmptyBody(),
            ),
            signing_properties=ACS3SigningProperties(action=action, version=version),
            identity=identity,
        )

    async def close(self) -> None:
        if self._owned_client is not None:
            await self._owned_client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()
