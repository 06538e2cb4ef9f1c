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

from enum import StrEnum

from pydantic import AnyHttpUrl, Field, IPvAnyAddress, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransportEnum(StrEnum):
    """Transport types supported by the MCP server."""

    HTTP = "http"
    STDIO = "stdio"


class Settings(BaseSettings):
    """Settings for the Proxmox MCP server."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    proxmox_url: AnyHttpUrl = Field(
        default="https://localhost:8006/api2/json",
        description="Base URL of the Proxmox VE API, including the /api2/json prefix",
    )
    proxmox_token: SecretStr | None = Field(
        default=None,
        description="Value of the Authorization header, e.g. PVEAPIToken=user@pam!mcp=<secret>",
    )
    proxmox_verify_ssl: bool = Field(
        default=False,
        description="Verify the TLS certificate of the Proxmox API (off for self-signed hosts)",
    )
    proxmox_default_node: str = Field(default="pve", description="Node used when a tool call does not name one")
    proxmox_timeout: float = Field(default=5.0, gt=0, description="Per-request timeout in seconds")
    proxmox_mcp_transport: TransportEnum = Field(
        default=TransportEnum.STDIO,
        description="Transport type for the MCP server",
    )
    proxmox_mcp_bind: IPvAnyAddress = Field(
        default="0.0.0.0",
        description="IP address to bind the MCP server when transport is HTTP",
    )
    proxmox_mcp_port: int = Field(
        default=9000,
        description="Port to bind the MCP server when transport is HTTP",
    )

    @property
    def token_value(self) -> str:
        """The raw token, or an empty string when none is configured."""
        if self.proxmox_token is None:
            return ""
        return self.proxmox_token.get_secret_value()


settings = Settings()
