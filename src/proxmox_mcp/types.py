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

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

VMID = Annotated[str, Field(pattern=r"^[0-9]+$", description="The VMID (e.g., 101)")]
NodeName = Annotated[
    str,
    Field(
        pattern=r"^[A-Za-z0-9][A-Za-z0-9.-]*$",
        max_length=63,
        description="The node name. Defaults to PROXMOX_DEFAULT_NODE when omitted.",
    ),
]
UPID = Annotated[str, Field(pattern=r"^UPID:[^/\s]+$", description="The Unique Process ID of the task")]
PowerState = Literal["start", "stop"]
ResourceType = Literal["vm", "storage", "node", "sdn"]


class GuestKind(StrEnum):
    """Kinds of guests a node can run."""

    CONTAINER = "container"
    VM = "vm"

    @property
    def api_segment(self) -> str:
        """Path segment the API uses for this kind of guest."""
        return "lxc" if self is GuestKind.CONTAINER else "qemu"


@dataclass(frozen=True)
class GuestRef:
    vmid: str
    node: str
    kind: GuestKind = GuestKind.CONTAINER

    @property
    def status_path(self) -> str:
        return f"nodes/{self.node}/{self.kind.api_segment}/{self.vmid}/status"


@dataclass(frozen=True)
class TaskRef:
    upid: str
    node: str


class ToolResult(BaseModel, extra="forbid"):
    """Uniform result of a tool handler, for both success and failure."""

    text: str = Field(..., description="Text returned to the caller.")
    is_error: bool = Field(default=False, description="Whether the text is a diagnostic for a failed call.")
