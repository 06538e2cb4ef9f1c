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
Conversion between handler outcomes, ToolResult values and MCP tool responses.
"""

from fastmcp.exceptions import ToolError

from proxmox_mcp.errors import ApiFailure, classify
from proxmox_mcp.proxmox_client import ProxmoxClient
from proxmox_mcp.types import ToolResult


def success(text: str) -> ToolResult:
    return ToolResult(text=text)


def failure(error: Exception, client: ProxmoxClient) -> ToolResult:
    """
    Classify any exception raised beneath a handler into an error ToolResult.
    """
    if not isinstance(error, ApiFailure):
        error = ApiFailure(str(error) or type(error).__name__)
    return ToolResult(text=classify(error, host=client.config.host), is_error=True)


def unwrap(result: ToolResult) -> str:
    """
    Hand a ToolResult to FastMCP: text on success, ToolError (reported with
    isError set) on failure.
    """
    if result.is_error:
        raise ToolError(result.text)
    return result.text
