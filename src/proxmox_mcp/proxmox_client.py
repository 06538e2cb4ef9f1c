# Copyright (c) 2025  Cisco Systems, Inc.
# All rights reserved.

# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
# 1. Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.

# THIS SOFTWARE IS PROVIDED BY THE AUTHOR AND CONTRIBUTORS ``AS IS'' AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED.  IN NO EVENT SHALL THE AUTHOR OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS
# OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION)
# HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY
# OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF
# SUCH DAMAGE.

import errno
import logging
import socket
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

import httpx

from proxmox_mcp.errors import ApiFailure, LowLevelCode

logger = logging.getLogger("proxmox-mcp.client")

BODY_LOG_LIMIT = 200


@dataclass(frozen=True)
class ConnectionConfig:
    """Static connection settings shared by every request for the process lifetime."""

    base_url: str
    auth_token: str = field(default="", repr=False)
    verify_tls: bool = False
    timeout: float = 5.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def host(self) -> str:
        return urlsplit(self.base_url).hostname or self.base_url


def join_url(base_url: str, endpoint: str) -> str:
    """
    Join a base URL and an endpoint path with exactly one slash between them.
    """
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def _iter_causes(exc: BaseException):
    """Walk an exception, its causes/contexts, and the members of exception groups."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        if isinstance(current, BaseExceptionGroup):
            stack.extend(current.exceptions)
        if current.__cause__ is not None:
            stack.append(current.__cause__)
        if current.__context__ is not None:
            stack.append(current.__context__)


def low_level_code_for(exc: BaseException) -> LowLevelCode | None:
    """
    Map a transport exception to the low-level code it stems from, if recognized.
    """
    for cause in _iter_causes(exc):
        if isinstance(cause, (httpx.TimeoutException, TimeoutError)):
            return LowLevelCode.TIMED_OUT
        if isinstance(cause, ConnectionRefusedError):
            return LowLevelCode.CONNECTION_REFUSED
        if isinstance(cause, socket.gaierror):
            return LowLevelCode.NAME_NOT_FOUND
        if isinstance(cause, OSError):
            if cause.errno == errno.ECONNREFUSED:
                return LowLevelCode.CONNECTION_REFUSED
            if cause.errno == errno.ETIMEDOUT:
                return LowLevelCode.TIMED_OUT
    return None


class ProxmoxClient(object):
    """
    Async client for the Proxmox VE API.

    Sends one authenticated request per call and raises ApiFailure for anything
    other than a 2xx response. No connection is kept between calls.
    """

    def __init__(self, config: ConnectionConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            verify=self.config.verify_tls,
            timeout=self.config.timeout,
            transport=self._transport,
        )

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        json_body: Any | None = None,
        params: dict | None = None,
    ) -> Any:
        """
        Make a request to the Proxmox API and return the decoded JSON body.

        Args:
            endpoint (str): API path relative to the base URL, e.g. ``cluster/resources``.
            method (str): HTTP method.
            json_body (Any | None): Payload sent as JSON; no body is sent when None.
            params (dict | None): Query string parameters.

        Raises:
            ApiFailure: On a non-2xx status or a transport error.
        """
        url = join_url(self.config.base_url, endpoint)
        headers = {"Authorization": self.config.auth_token}
        if json_body is not None:
            headers["Content-Type"] = "application/json"
        logger.debug("%s %s", method, endpoint)
        try:
            async with self._client() as client:
                resp = await client.request(method, url, headers=headers, json=json_body, params=params)
        except httpx.TransportError as e:
            code = low_level_code_for(e)
            logger.error("%s %s: transport error (%s): %s", method, endpoint, code or "unrecognized", e)
            raise ApiFailure.from_transport_error(str(e) or type(e).__name__, code) from e

        if not resp.is_success:
            body = resp.text
            logger.error("%s %s: %d %s", method, endpoint, resp.status_code, body[:BODY_LOG_LIMIT])
            raise ApiFailure.from_response(resp.status_code, body)
        return resp.json()

    async def get(self, endpoint: str, params: dict | None = None) -> Any:
        """
        Make a GET request to the Proxmox API.
        """
        return await self.request(endpoint, "GET", params=params)

    async def post(self, endpoint: str, data: Any | None = None) -> Any:
        """
        Make a POST request to the Proxmox API.
        """
        return await self.request(endpoint, "POST", json_body=data)
