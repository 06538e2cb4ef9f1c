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
import os
import sys

from fastmcp import FastMCP

from proxmox_mcp.settings import TransportEnum, settings
from proxmox_mcp.tools import cluster, guests, tasks

# Set up logging
logger = logging.getLogger("proxmox-mcp")
loglevel = logging.DEBUG if os.getenv("DEBUG", "false").lower() == "true" else logging.INFO
logger.setLevel(loglevel)
# Configure handler with format for this package only
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

server_mcp = FastMCP(
    name="Proxmox Manager",
    instructions=(
        "Inspect and control guests on a Proxmox VE cluster. Use get_resource_health to spot memory pressure "
        "and get_task_logs with the UPID returned by set_lxc_state to diagnose failed start/stop tasks."
    ),
)

guests.register_tools(server_mcp)
cluster.register_tools(server_mcp)
tasks.register_tools(server_mcp)


def log_startup_banner() -> None:
    """Log the connection details to stderr. The token itself is never logged."""
    logger.info("Proxmox MCP Server starting...")
    logger.info(f"URL: {settings.proxmox_url}")
    logger.info(f"Token: {'REDACTED (present)' if settings.token_value else 'MISSING'}")
    if not settings.token_value:
        logger.warning("PROXMOX_TOKEN is not set; every Proxmox API call will fail with 401 Unauthorized")
    if not settings.proxmox_verify_ssl:
        logger.warning("TLS certificate verification is disabled for the Proxmox API (PROXMOX_VERIFY_SSL=false)")


def main() -> None:
    log_startup_banner()
    try:
        if settings.proxmox_mcp_transport == TransportEnum.HTTP:
            logger.info(f"Listening on http://{settings.proxmox_mcp_bind}:{settings.proxmox_mcp_port}")
            server_mcp.run(transport="http", host=str(settings.proxmox_mcp_bind), port=settings.proxmox_mcp_port)
        else:
            logger.info("Listening on stdin")
            server_mcp.run(transport="stdio", show_banner=False)
    except Exception as e:
        logger.critical(f"Failed to start the MCP transport: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
