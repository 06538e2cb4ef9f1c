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
Health metrics derived from a guest's ``status/current`` telemetry.
"""

import math
from typing import Any

from pydantic import BaseModel, Field, field_validator

from proxmox_mcp.types import GuestKind

GB = 1_000_000_000
MB = 1_000_000
KIB = 1024
WARN_PERCENT = 90


class HealthSnapshot(BaseModel, extra="ignore"):
    """
    The subset of ``status/current`` used for health reporting. Fields the API
    did not report stay None.
    """

    status: str | None = Field(default=None, description="Run state, e.g. running or stopped.")
    mem: int | None = Field(default=None, description="Memory in use, in bytes.")
    maxmem: int | None = Field(default=None, description="Memory limit, in bytes.")
    swap: int | None = Field(default=None, description="Swap in use, in bytes (containers only).")
    maxswap: int | None = Field(default=None, description="Swap limit, in bytes (containers only).")
    diskread: int | None = Field(default=None, description="Bytes read from disk since start.")
    diskwrite: int | None = Field(default=None, description="Bytes written to disk since start.")
    uptime: int | None = Field(default=None, description="Uptime in seconds.")

    @field_validator("mem", "maxmem", "swap", "maxswap", "diskread", "diskwrite", "uptime", mode="before")
    @classmethod
    def _coerce_counter(cls, value: Any) -> int | None:
        # Whole non-negative byte/second counts; non-numeric values count as not reported
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        return max(int(number), 0)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percent(part: int | None, whole: int | None) -> int:
    """
    Whole percentage of ``part`` in ``whole``, 0 when ``whole`` is missing or zero.
    """
    if not whole:
        return 0
    return round_half_up((part or 0) / whole * 100)


def format_bytes(n: int | None) -> str:
    """
    Render a byte count: one decimal GB from 1e9, one decimal MB from 1e6,
    otherwise whole KB (n / 1024, rounded half up).
    """
    n = n or 0
    if n >= GB:
        return f"{n / GB:.1f} GB"
    if n >= MB:
        return f"{n / MB:.1f} MB"
    return f"{round_half_up(n / KIB)} KB"


def thrashing_warnings(mem_pct: int, swap_pct: int | None) -> list[str]:
    warnings = []
    if mem_pct >= WARN_PERCENT:
        warnings.append("high memory")
    if swap_pct is not None and swap_pct >= WARN_PERCENT:
        warnings.append("swap nearly full")
    return warnings


def summarize(snapshot: HealthSnapshot, vmid: str, node: str, kind: GuestKind) -> str:
    """
    Build the multi-line health report for one guest.

    Lines, in order: header, memory, swap (only when the guest has swap),
    disk I/O, uptime (only when reported), and a thrashing warning when
    memory or swap is at 90% or more.
    """
    mem_pct = percent(snapshot.mem, snapshot.maxmem)
    swap_pct = percent(snapshot.swap, snapshot.maxswap) if snapshot.maxswap else None

    lines = [
        f"VMID {vmid} ({kind}) on {node} — {snapshot.status or 'unknown'}",
        f"Memory: {format_bytes(snapshot.mem)} / {format_bytes(snapshot.maxmem)} ({mem_pct}%)",
    ]
    if swap_pct is not None:
        lines.append(f"Swap:   {format_bytes(snapshot.swap)} / {format_bytes(snapshot.maxswap)} ({swap_pct}%)")
    lines.append(f"Disk R/W: {format_bytes(snapshot.diskread)} / {format_bytes(snapshot.diskwrite)}")
    if snapshot.uptime:
        lines.append(f"Uptime: {snapshot.uptime // 3600}h")

    warnings = thrashing_warnings(mem_pct, swap_pct)
    if warnings:
        lines.append("")
        lines.append(f"⚠️ Consider: {' and '.join(warnings)}. Risk of thrashing if both are high.")
    return "\n".join(lines)
