# Copyright (c) 2025  Cisco Systems, Inc.
# All rights reserved.

"""Shared test fixtures for proxmox-mcp tests."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Generator

# Settings are read at import time, so the environment has to be in place first.
os.environ.setdefault("PROXMOX_URL", "https://pve.example.com:8006/api2/json")
os.environ.setdefault("PROXMOX_TOKEN", "PVEAPIToken=root@pam!mcp=s3cr3t-token")
os.environ.setdefault("PROXMOX_DEFAULT_NODE", "pve")

import httpx  # noqa: E402
import pytest  # noqa: E402

from proxmox_mcp.proxmox_client import ConnectionConfig, ProxmoxClient  # noqa: E402

TEST_TOKEN = "PVEAPIToken=root@pam!mcp=s3cr3t-token"
TEST_BASE_URL = "https://pve.example.com:8006/api2/json"


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.payload = payload
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Connection config pointing at a fake Proxmox host."""
    return ConnectionConfig(base_url=TEST_BASE_URL, auth_token=TEST_TOKEN)


@pytest.fixture
def make_client(connection_config: ConnectionConfig) -> Callable[..., ProxmoxClient]:
    """Build a ProxmoxClient whose requests are served by the given handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> ProxmoxClient:
        return ProxmoxClient(connection_config, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def proxmox_log(caplog: pytest.LogCaptureFixture) -> Generator[pytest.LogCaptureFixture, None, None]:
    """Capture records from the package logger, which does not propagate to root."""
    pkg_logger = logging.getLogger("proxmox-mcp")
    pkg_logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="proxmox-mcp")
    yield caplog
    pkg_logger.removeHandler(caplog.handler)
