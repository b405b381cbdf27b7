# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess wrapper."""

from __future__ import annotations

import subprocess
from typing import Any

import pytest

from dotnet_detect import subprocess_utils
from dotnet_detect.subprocess_utils import TIMEOUT_RETURNCODE, SubprocessExecutionError, run_command


def test_empty_command_is_rejected() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_non_zero_exit_raises_when_checked(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(command, 2, stdout="", stderr="boom")

    monkeypatch.setattr(subprocess_utils.subprocess, "run", _fake_run)

    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command(["dotnet", "probe.dll"])
    assert excinfo.value.returncode == 2
    assert run_command(["dotnet", "probe.dll"], check=False).stderr == "boom"


def test_timeout_maps_to_return_code(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def _fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        captured.update(kwargs)
        raise subprocess.TimeoutExpired(command, kwargs["timeout"], output=b"partial")

    monkeypatch.setattr(subprocess_utils.subprocess, "run", _fake_run)

    completed = run_command(["dotnet", "probe.dll"], check=False, timeout=1.5)

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert completed.stdout == "partial"
    assert "timed out after 1.5s" in completed.stderr
    assert captured["stdin"] is subprocess.DEVNULL
