# Copyright (c) 2025  Cisco Systems, Inc.
# All rights reserved.

"""End-to-end tests of the MCP tools through an in-memory FastMCP client."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastmcp.client import Client
from fastmcp.client.transports import FastMCPTransport
from inline_snapshot import snapshot
from mcp.types import TextContent

from proxmox_mcp.server import server_mcp

from .conftest import TEST_TOKEN, RecordingHandler


@pytest.fixture()
async def main_mcp_client():
    async with Client(transport=server_mcp) as mcp_client:
        yield mcp_client


@pytest.fixture
def api(make_client):
    """Serve tool calls from a recording handler instead of a real Proxmox host."""
    handler = RecordingHandler(payload={"data": []})
    with patch("proxmox_mcp.tools.dependencies.proxmox_client", make_client(handler)):
        yield handler


def text_of(result) -> str:
    assert isinstance(result.content[0], TextContent)
    return result.content[0].text


async def test_list_tools(main_mcp_client: Client[FastMCPTransport]):
    tools = await main_mcp_client.list_tools()

    assert sorted(tool.name for tool in tools) == snapshot(
        ["get_lxc_status", "get_resource_health", "get_task_logs", "list_all_resources", "set_lxc_state"]
    )


async def test_resource_health_report(main_mcp_client: Client[FastMCPTransport], api):
    api.payload = {"data": {"status": "running", "mem": 900000000, "maxmem": 1000000000, "swap": 0, "maxswap": 0}}

    result = await main_mcp_client.call_tool(name="get_resource_health", arguments={"vmid": "101", "node": "pve"})

    text = text_of(result)
    assert result.is_error is False
    assert text.splitlines()[0] == "VMID 101 (container) on pve — running"
    assert "(90%)" in text.splitlines()[1]
    assert "Swap" not in text
    assert "high memory" in text.splitlines()[-1]


async def test_default_node(main_mcp_client: Client[FastMCPTransport], api):
    api.payload = {"data": {"status": "running"}}

    await main_mcp_client.call_tool(name="get_lxc_status", arguments={"vmid": "101"})

    assert api.last.url.path == "/api2/json/nodes/pve/lxc/101/status/current"


async def test_health_for_vm(main_mcp_client: Client[FastMCPTransport], api):
    api.payload = {"data": {"status": "running", "maxmem": 4294967296, "mem": 1073741824}}

    result = await main_mcp_client.call_tool(
        name="get_resource_health", arguments={"vmid": "200", "node": "pve", "kind": "vm"}
    )

    assert api.last.url.path == "/api2/json/nodes/pve/qemu/200/status/current"
    assert text_of(result).splitlines()[1] == "Memory: 1.1 GB / 4.3 GB (25%)"


async def test_set_state(main_mcp_client: Client[FastMCPTransport], api):
    api.payload = {"data": "UPID:pve:00001234:00005678:66F0A1B2:vzstop:101:root@pam:"}

    result = await main_mcp_client.call_tool(name="set_lxc_state", arguments={"vmid": "101", "state": "stop"})

    assert text_of(result).startswith("Successfully sent stop command to LXC 101")
    assert api.last.method == "POST"


async def test_list_all_resources_filter(main_mcp_client: Client[FastMCPTransport], api):
    await main_mcp_client.call_tool(name="list_all_resources", arguments={"resource_type": "vm"})

    assert api.last.url.params["type"] == "vm"


async def test_task_logs_empty(main_mcp_client: Client[FastMCPTransport], api):
    result = await main_mcp_client.call_tool(
        name="get_task_logs", arguments={"upid": "UPID:pve:00001234:00005678:66F0A1B2:vzstart:101:root@pam:"}
    )

    assert text_of(result) == "No log entries found for this task."


async def test_unauthorized_is_error_result(main_mcp_client: Client[FastMCPTransport], api):
    api.status_code = 401
    api.text = "authentication failure"

    result = await main_mcp_client.call_tool(name="list_all_resources", arguments={}, raise_on_error=False)

    text = text_of(result)
    assert result.is_error is True
    assert "401" in text
    assert "Unauthorized" in text
    assert TEST_TOKEN not in text


async def test_invalid_state_rejected(main_mcp_client: Client[FastMCPTransport], api):
    result = await main_mcp_client.call_tool(
        name="set_lxc_state", arguments={"vmid": "101", "state": "reboot"}, raise_on_error=False
    )

    assert result.is_error is True
    assert api.requests == []


async def test_invalid_vmid_rejected(main_mcp_client: Client[FastMCPTransport], api):
    result = await main_mcp_client.call_tool(
        name="get_lxc_status", arguments={"vmid": "../../cluster"}, raise_on_error=False
    )

    assert result.is_error is True
    assert api.requests == []


class TestStartup:
    """Test the startup banner and fatal transport failures."""

    def test_banner_redacts_token(self, proxmox_log):
        from proxmox_mcp.server import log_startup_banner

        log_startup_banner()

        messages = [r.getMessage() for r in proxmox_log.records]
        assert "Token: REDACTED (present)" in messages
        assert all(TEST_TOKEN not in m for m in messages)

    def test_transport_failure_exits_nonzero(self, proxmox_log):
        from proxmox_mcp import server

        with patch.object(server.server_mcp, "run", side_effect=OSError("stdin closed")):
            with pytest.raises(SystemExit) as exc_info:
                server.main()

        assert exc_info.value.code == 1
        assert any(r.levelname == "CRITICAL" for r in proxmox_log.records)
