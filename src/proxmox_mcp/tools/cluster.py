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

import json
import logging

from proxmox_mcp.proxmox_client import ProxmoxClient
from proxmox_mcp.tools.dependencies import get_proxmox_client_dep
from proxmox_mcp.tools.results import failure, success, unwrap
from proxmox_mcp.types import ResourceType, ToolResult

logger = logging.getLogger("proxmox-mcp.tools.cluster")


async def cluster_resources(client: ProxmoxClient, resource_type: ResourceType | None = None) -> ToolResult:
    """
    List cluster resources, pretty-printed.

    Args:
        client (ProxmoxClient): The Proxmox client instance.
        resource_type (ResourceType | None): Only return resources of this type. All types when None.
    """
    params = {"type": resource_type} if resource_type else None
    try:
        resp = await client.get("cluster/resources", params=params)
        return success(json.dumps(resp.get("data"), indent=2))
    except Exception as e:
        logger.error(f"Error listing cluster resources: {str(e)}", exc_info=True)
        return failure(e, client)


def register_tools(mcp):
    """Register all cluster-related tools with the FastMCP server."""

    @mcp.tool(
        annotations={
            "title": "List Proxmox Cluster Resources",
            "readOnlyHint": True,
        },
    )
    async def list_all_resources(resource_type: ResourceType | None = None) -> str:
        """
        Lists all VMs, LXCs, storage pools and nodes on the cluster as raw JSON. Optionally restrict the list with
        resource_type: "vm" (VMs and LXCs), "storage", "node" or "sdn".
        """
        return unwrap(await cluster_resources(get_proxmox_client_dep(), resource_type))
