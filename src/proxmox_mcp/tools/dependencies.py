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
Dependency injection module for Proxmox client management.
"""

import logging

from proxmox_mcp.proxmox_client import ConnectionConfig, ProxmoxClient
from proxmox_mcp.settings import settings

logger = logging.getLogger("proxmox-mcp.dependencies")


def connection_config_from_settings() -> ConnectionConfig:
    return ConnectionConfig(
        base_url=str(settings.proxmox_url),
        auth_token=settings.token_value,
        verify_tls=settings.proxmox_verify_ssl,
        timeout=settings.proxmox_timeout,
    )


# Global singleton client; it only holds the immutable connection config
proxmox_client = ProxmoxClient(connection_config_from_settings())


def get_proxmox_client_dep() -> ProxmoxClient:
    """
    Dependency function to get the process-wide Proxmox client.
    """
    return proxmox_client


def default_node(node: str | None) -> str:
    """Resolve an omitted node argument to the configured default node."""
    return node or settings.proxmox_default_node
