#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from itertools import chain
from types import TracebackType
from typing import Self

import aiohttp

from .._http import ACSRequest, ACSResponse, Fields
from ..exceptions import RequestBuildError, TransportError
from . import HTTPClient

logger = logging.getLogger(__name__)


class AIOHTTPClient(HTTPClient):
    """Implementation of :py:class:`.HTTPClient` using aiohttp.

    Requests are sent exactly once with the session's default timeouts.
    """

    def __init__(self, *, _session: aiohttp.ClientSession | None = None) -> None:
        """
        :param _session: Session to send requests with. When omitted, one is created
        on first use and closed by :py:meth:`close`.
        """
        self._session = _session
        self._owns_session = _session is None

    async def send(self, *, request: ACSRequest) -> ACSResponse:
        """Send HTTP request using aiohttp client.

        The URL is ``{scheme}://{host}{path}``. The query pairs are attached in the
        caller's order, including repeated keys.

        :param request: The request including destination, query, fields and body.
        """
        headers_list = list(
            chain.from_iterable(fld.as_tuples() for fld in request.fields)
        )
        content_type = request.body.content_type
        if content_type is not None and "Content-Type" not in request.fields:
            headers_list.append(("Content-Type", content_type))

        url = request.destination.build()
        logger.debug("Sending %s request to %s", request.method, url)
        try:
            async with self._get_session().request(
                method=request.method,
                url=url,
                params=request.query,
                headers=headers_list,
                data=request.body.payload or None,
            ) as resp:
                return await self._marshal_response(resp)
        except aiohttp.InvalidURL as e:
            raise RequestBuildError(f"Unable to build request to {url}: {e}") from e
        # Certificate errors are also ValueErrors, so client errors are checked first.
        except (aiohttp.ClientError, TimeoutError) as e:
            raise TransportError(f"Request to {url} failed: {e!r}") from e
        except ValueError as e:
            raise RequestBuildError(f"Unable to build request to {url}: {e}") from e

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _marshal_response(
        self, aiohttp_resp: aiohttp.ClientResponse
    ) -> ACSResponse:
        """Convert a ``aiohttp.ClientResponse`` to an ``ACSResponse``."""
        body = await aiohttp_resp.read()
        logger.debug(
            "Received response with status %s (%d bytes)",
            aiohttp_resp.status,
            len(body),
        )
        return ACSResponse(
            status=aiohttp_resp.status,
            fields=Fields.from_tuples(aiohttp_resp.headers.items()),
            body=body,
            reason=aiohttp_resp.reason,
        )

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()
