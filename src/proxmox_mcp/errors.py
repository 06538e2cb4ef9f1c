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

"""
Structured API failures and their translation into operator-facing diagnostics.
"""

from enum import StrEnum


class LowLevelCode(StrEnum):
    """Transport failures recognized by the classifier."""

    CONNECTION_REFUSED = "connection-refused"
    TIMED_OUT = "timed-out"
    NAME_NOT_FOUND = "name-not-found"


class FailureKind(StrEnum):
    """Error taxonomy; every member maps to exactly one diagnostic template."""

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    SERVER = "server"
    OTHER_API = "other_api"
    HOST_UNREACHABLE = "host_unreachable"
    NAME_RESOLUTION = "name_resolution"
    UNKNOWN_TRANSPORT = "unknown_transport"


class ApiFailure(Exception):
    """
    A failed call to the Proxmox API.

    Exactly one of ``status_code`` (the server answered) or ``low_level_code``
    (the request never got a response) is set for failures raised by the
    client. Both are None when the transport error was not recognized, or for
    failures raised outside of the client.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        raw_body: str | None = None,
        low_level_code: LowLevelCode | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.raw_body = raw_body
        self.low_level_code = low_level_code

    @classmethod
    def from_response(cls, status_code: int, raw_body: str) -> "ApiFailure":
        return cls(f"HTTP {status_code}: {raw_body}", status_code=status_code, raw_body=raw_body)

    @classmethod
    def from_transport_error(cls, message: str, low_level_code: LowLevelCode | None) -> "ApiFailure":
        return cls(message, low_level_code=low_level_code)

    @property
    def kind(self) -> FailureKind:
        return failure_kind(self)

    def __repr__(self) -> str:
        return (
            f"ApiFailure(status_code={self.status_code!r}, low_level_code={self.low_level_code!r}, "
            f"message={self.message!r})"
        )


def failure_kind(failure: ApiFailure) -> FailureKind:
    """
    Place a failure in the taxonomy. Status codes always win over low-level codes.
    """
    if failure.status_code is not None:
        if failure.status_code == 401:
            return FailureKind.AUTHENTICATION
        if failure.status_code == 403:
            return FailureKind.AUTHORIZATION
        if failure.status_code >= 500:
            return FailureKind.SERVER
        return FailureKind.OTHER_API
    if failure.low_level_code in (LowLevelCode.CONNECTION_REFUSED, LowLevelCode.TIMED_OUT):
        return FailureKind.HOST_UNREACHABLE
    if failure.low_level_code == LowLevelCode.NAME_NOT_FOUND:
        return FailureKind.NAME_RESOLUTION
    return FailureKind.UNKNOWN_TRANSPORT


def classify(failure: ApiFailure, host: str | None = None) -> str:
    """
    Turn an ApiFailure into a single human-readable diagnostic.

    Args:
        failure (ApiFailure): The failure raised by the client or a tool handler.
        host (str | None): The configured API host, named in DNS failures.

    Returns:
        str: The diagnostic. It never contains the configured token.
    """
    kind = failure_kind(failure)
    if kind == FailureKind.AUTHENTICATION:
        return (
            "Proxmox API returned 401 Unauthorized. Token expired or invalid: "
            "check PROXMOX_TOKEN and re-run your setup script if needed."
        )
    if kind == FailureKind.AUTHORIZATION:
        return "Proxmox API returned 403 Forbidden. Token doesn't have permission for this action."
    if kind == FailureKind.SERVER:
        return f"Proxmox server error ({failure.status_code}). Host may be overloaded or the service down."
    if kind == FailureKind.OTHER_API:
        detail = failure.raw_body or failure.message
        return f"Proxmox API error ({failure.status_code}): {detail[:300]}"
    if kind == FailureKind.HOST_UNREACHABLE:
        if failure.low_level_code == LowLevelCode.CONNECTION_REFUSED:
            return "Proxmox host unreachable (connection refused). Host down, wrong port, or firewall blocking."
        return "Proxmox host unreachable (timeout). Host down or network issue."
    if kind == FailureKind.NAME_RESOLUTION:
        named = f" ({host})" if host else ""
        return f"Proxmox host not found (DNS failed). Check PROXMOX_URL hostname{named}."
    return f"Proxmox request failed: {failure.message}"
