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

import logging

from proxmox_mcp.proxmox_client import ProxmoxClient
from proxmox_mcp.tools.dependencies import default_node, get_proxmox_client_dep
from proxmox_mcp.tools.results import failure, success, unwrap
from proxmox_mcp.types import UPID, NodeName, TaskRef, ToolResult

logger = logging.getLogger("proxmox-mcp.tools.tasks")

NO_LOG_ENTRIES = "No log entries found for this task."


async def task_log(task: TaskRef, client: ProxmoxClient) -> ToolResult:
    """
    Fetch the log of an asynchronous task as plain text, one entry per line.

    Args:
        task (TaskRef): The task to read.
        client (ProxmoxClient): The Proxmox client instance.
    """
    try:
        resp = await client.get(f"nodes/{task.node}/tasks/{task.upid}/log")
        # Entries look like {"n": <line number>, "t": <text>}
        output = "\n".join(str(entry.get("t", "")) for entry in resp.get("data") or [])
        return success(output or NO_LOG_ENTRIES)
    except Exception as e:
        logger.error(f"Error getting log of task {task.upid} on {task.node}: {str(e)}", exc_info=True)
        return failure(e, client)


def register_tools(mcp):
    """Register all task-related tools with the FastMCP server."""

    @mcp.tool(
        annotations={
            "title": "Get Proxmox Task Logs",
            "readOnlyHint": True,
        },
    )
    async def get_task_logs(upid: UPID, node: NodeName | None = None) -> str:
        """
        Fetches logs for a specific Proxmox task (UPID) to diagnose failures, e.g. a container that did not start
        or a backup job that failed.
        """
        task = TaskRef(upid=upid, node=default_node(node))
        return unwrap(await task_log(task, get_proxmox_client_dep()))
