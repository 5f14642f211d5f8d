# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Protocol

from .._http import ACSRequest
from ..exceptions import NonUtf8ResponseError
from ..interfaces.http import Response


class HTTPClient(Protocol):
    """An asynchronous HTTP client capable of sending a signed request."""

    async def send(self, *, request: ACSRequest) -> Response:
        """Send the request and read the full response body.

        :param request: The signed request including destination, query, fields
            and body.
        :raises RequestBuildError: If the request cannot be constructed.
        :raises TransportError: If the request fails in flight.
        """
        ...


def read_response(response: Response) -> tuple[int, str]:
    """Validate that a response body is UTF-8 text.

    :returns: The status code and the decoded body.
    :raises NonUtf8ResponseError: If the body is not valid UTF-8.
    """
    try:
        text = response.body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise NonUtf8ResponseError("Body contains non UTF-8 characters.") from e
    return response.status, text


__all__ = ("HTTPClient", "read_response")
