# Copyright (c) 2025  Cisco Systems, Inc.
# All rights reserved.

"""Unit tests for the health metric calculator."""

from __future__ import annotations

import pytest
from inline_snapshot import snapshot

from proxmox_mcp.health import HealthSnapshot, format_bytes, percent, summarize
from proxmox_mcp.types import GuestKind


class TestFormatBytes:
    """Test the three-tier byte formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0 KB"),
            (None, "0 KB"),
            (511, "0 KB"),
            (512, "1 KB"),
            (999, "1 KB"),
            (999_999, "977 KB"),
            (1_000_000, "1.0 MB"),
            (1_500_000, "1.5 MB"),
            (999_999_999, "1000.0 MB"),
            (1_000_000_000, "1.0 GB"),
            (2_000_000_000, "2.0 GB"),
            (8_589_934_592, "8.6 GB"),
        ],
    )
    def test_tiers(self, value, expected):
        assert format_bytes(value) == expected


class TestPercent:
    """Test percentage calculation."""

    def test_rounds_half_up(self):
        assert percent(1, 8) == 13
        assert percent(5, 8) == 63
        assert percent(904, 1000) == 90

    def test_zero_whole(self):
        assert percent(900, 0) == 0

    def test_missing_values(self):
        assert percent(None, 1000) == 0
        assert percent(900, None) == 0


class TestHealthSnapshot:
    """Test parsing of raw telemetry."""

    def test_ignores_unknown_fields(self):
        snap = HealthSnapshot.model_validate({"status": "running", "mem": 1, "cpu": 0.25, "netin": 10})
        assert snap.mem == 1
        assert snap.maxmem is None

    def test_empty(self):
        snap = HealthSnapshot.model_validate({})
        assert snap.status is None
        assert snap.uptime is None

    def test_fractional_values_truncated(self):
        snap = HealthSnapshot.model_validate({"mem": 123.0, "maxmem": 1000, "uptime": 3600.5, "diskread": "2048"})
        assert snap.mem == 123
        assert snap.uptime == 3600
        assert snap.diskread == 2048

    def test_negative_and_garbage_values(self):
        snap = HealthSnapshot.model_validate({"mem": -5, "swap": "n/a", "maxswap": float("nan"), "uptime": True})
        assert snap.mem == 0
        assert snap.swap is None
        assert snap.maxswap is None
        assert snap.uptime is None


class TestSummarize:
    """Test the health report."""

    def test_high_memory_report(self):
        snap = HealthSnapshot(status="running", mem=900_000_000, maxmem=1_000_000_000, swap=0, maxswap=0)
        report = summarize(snap, "101", "pve", GuestKind.CONTAINER)
        assert report == snapshot(
            """\
VMID 101 (container) on pve — running
Memory: 900.0 MB / 1.0 GB (90%)
Disk R/W: 0 KB / 0 KB

⚠️ Consider: high memory. Risk of thrashing if both are high.\
"""
        )

    def test_header_is_first_line(self):
        snap = HealthSnapshot(status="running", mem=900, maxmem=1000)
        lines = summarize(snap, "101", "pve", GuestKind.CONTAINER).splitlines()
        assert lines[0] == "VMID 101 (container) on pve — running"
        assert lines[1] == "Memory: 1 KB / 1 KB (90%)"
        assert "high memory" in lines[-1]

    def test_zero_maxmem(self):
        snap = HealthSnapshot(status="stopped", mem=0, maxmem=0)
        report = summarize(snap, "200", "pve", GuestKind.VM)
        assert "Memory: 0 KB / 0 KB (0%)" in report
        assert "Consider" not in report

    def test_swap_line_omitted_without_maxswap(self):
        snap = HealthSnapshot(status="running", mem=100, maxmem=1000, swap=5_000_000, maxswap=0)
        report = summarize(snap, "101", "pve", GuestKind.CONTAINER)
        assert "Swap" not in report
        assert "swap nearly full" not in report

    def test_swap_line_present(self):
        snap = HealthSnapshot(status="running", mem=100_000_000, maxmem=1_000_000_000, swap=256_000_000, maxswap=512_000_000)
        lines = summarize(snap, "101", "pve", GuestKind.CONTAINER).splitlines()
        assert lines[2] == "Swap:   256.0 MB / 512.0 MB (50%)"
        assert lines[3].startswith("Disk R/W:")

    def test_both_warnings_joined(self):
        snap = HealthSnapshot(status="running", mem=950, maxmem=1000, swap=920, maxswap=1000)
        report = summarize(snap, "101", "pve", GuestKind.CONTAINER)
        assert report.endswith("⚠️ Consider: high memory and swap nearly full. Risk of thrashing if both are high.")

    def test_swap_warning_only(self):
        snap = HealthSnapshot(status="running", mem=100, maxmem=1000, swap=900, maxswap=1000)
        last = summarize(snap, "101", "pve", GuestKind.CONTAINER).splitlines()[-1]
        assert "swap nearly full" in last
        assert "high memory" not in last

    def test_uptime_whole_hours(self):
        snap = HealthSnapshot(status="running", mem=1, maxmem=1000, uptime=7199)
        lines = summarize(snap, "300", "node2", GuestKind.VM).splitlines()
        assert lines[0] == "VMID 300 (vm) on node2 — running"
        assert lines[-1] == "Uptime: 1h"

    def test_zero_uptime_omitted(self):
        snap = HealthSnapshot(status="stopped", uptime=0)
        assert "Uptime" not in summarize(snap, "101", "pve", GuestKind.CONTAINER)

    def test_unknown_status(self):
        report = summarize(HealthSnapshot(), "101", "pve", GuestKind.CONTAINER)
        assert report.splitlines()[0] == "VMID 101 (container) on pve — unknown"

    def test_disk_io(self):
        snap = HealthSnapshot(diskread=3_400_000_000, diskwrite=52_428_800)
        assert "Disk R/W: 3.4 GB / 52.4 MB" in summarize(snap, "101", "pve", GuestKind.CONTAINER)
