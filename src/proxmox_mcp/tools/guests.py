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

from proxmox_mcp.health import HealthSnapshot, summarize
from proxmox_mcp.proxmox_client import ProxmoxClient
from proxmox_mcp.tools.dependencies import default_node, get_proxmox_client_dep
from proxmox_mcp.tools.results import failure, success, unwrap
from proxmox_mcp.types import VMID, GuestKind, GuestRef, NodeName, PowerState, ToolResult

logger = logging.getLogger("proxmox-mcp.tools.guests")


async def lxc_status(guest: GuestRef, client: ProxmoxClient) -> ToolResult:
    """
    Fetch the raw ``status/current`` telemetry of a container, pretty-printed.

    Args:
        guest (GuestRef): The container to query.
        client (ProxmoxClient): The Proxmox client instance.
    """
    try:
        resp = await client.get(f"{guest.status_path}/current")
        return success(json.dumps(resp.get("data"), indent=2))
    except Exception as e:
        logger.error(f"Error getting status of LXC {guest.vmid} on {guest.node}: {str(e)}", exc_info=True)
        return failure(e, client)


async def set_lxc_power_state(guest: GuestRef, state: PowerState, client: ProxmoxClient) -> ToolResult:
    """
    Send a start or stop command to a container.

    The API answers with the UPID of the task it queued; it is included in the
    confirmation so its log can be fetched with get_task_logs.
    """
    try:
        resp = await client.post(f"{guest.status_path}/{state}")
        text = f"Successfully sent {state} command to LXC {guest.vmid}"
        upid = resp.get("data") if isinstance(resp, dict) else None
        if isinstance(upid, str) and upid:
            text += f"\nTask: {upid}"
        return success(text)
    except Exception as e:
        logger.error(f"Error sending {state} to LXC {guest.vmid} on {guest.node}: {str(e)}", exc_info=True)
        return failure(e, client)


async def resource_health(guest: GuestRef, client: ProxmoxClient) -> ToolResult:
    try:
        resp = await client.get(f"{guest.status_path}/current")
        snapshot = HealthSnapshot.model_validate(resp.get("data") or {})
        return success(summarize(snapshot, guest.vmid, guest.node, guest.kind))
    except Exception as e:
        logger.error(f"Error getting health of {guest.kind} {guest.vmid} on {guest.node}: {str(e)}", exc_info=True)
        return failure(e, client)


def register_tools(mcp):
    """Register all guest-related tools with the FastMCP server."""

    @mcp.tool(
        annotations={
            "title": "Get Proxmox LXC Status",
            "readOnlyHint": True,
        },
    )
    async def get_lxc_status(vmid: VMID, node: NodeName | None = None) -> str:
        """
        Gets the current status of a Proxmox LXC container: run state, CPU, memory, swap, disk, network and uptime
        as raw JSON.
        """
        guest = GuestRef(vmid=vmid, node=default_node(node), kind=GuestKind.CONTAINER)
        return unwrap(await lxc_status(guest, get_proxmox_client_dep()))

    @mcp.tool(
        annotations={
            "title": "Start or Stop a Proxmox LXC",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": True,
        },
    )
    async def set_lxc_state(vmid: VMID, state: PowerState, node: NodeName | None = None) -> str:
        """
        Starts or stops a Proxmox LXC container. Returns a confirmation and, when available, the UPID of the queued task.
        """
        guest = GuestRef(vmid=vmid, node=default_node(node), kind=GuestKind.CONTAINER)
        return unwrap(await set_lxc_power_state(guest, state, get_proxmox_client_dep()))

    @mcp.tool(
        annotations={
            "title": "Get Proxmox Guest Health",
            "readOnlyHint": True,
        },
    )
    async def get_resource_health(vmid: VMID, node: NodeName | None = None, kind: GuestKind = GuestKind.CONTAINER) -> str:
        """
        Reports memory, swap, and disk IO for a VM or LXC. Use this to spot thrashing (high RAM + swap + IO) before the
        guest becomes unresponsive. kind is "container" (LXC) or "vm" (QEMU).
        """
        guest = GuestRef(vmid=vmid, node=default_node(node), kind=kind)
        return unwrap(await resource_health(guest, get_proxmox_client_dep()))
