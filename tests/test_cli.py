"""Tests for the podusage CLI."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest
from typer.testing import CliRunner

from podusage.cli.main import app

runner = CliRunner()

_RESPONSES = {
    "get ns --no-headers -o custom-columns=:metadata.name": "build-service\n\n",
    "get pods -n build-service --no-headers -o custom-columns=:metadata.name": (
        "pod-a\n"
    ),
    "get PodMetrics pod-a -n build-service -oyaml": (
        "containers:\n- name: main\n  usage:\n    cpu: 5m\n    memory: 10Mi\n"
    ),
    "get PodMetrics pod-a -n build-service --no-headers": "pod-a   5m   10Mi   15s\n",
}


def _fake_run(command: Sequence[str], **_: object) -> subprocess.CompletedProcess[str]:
    key = " ".join(command[1:])
    if key not in _RESPONSES:
        raise subprocess.CalledProcessError(1, list(command), stderr="NotFound")
    return subprocess.CompletedProcess(
        args=list(command), returncode=0, stdout=_RESPONSES[key], stderr=""
    )


@pytest.fixture(autouse=True)
def _isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "PODUSAGE_KUBECTL",
        "PODUSAGE_MAX_CONCURRENCY",
        "PODUSAGE_FORMAT",
        "PODUSAGE_OUTPUT_DIR",
        "PODUSAGE_EXCLUDE_SYSTEM",
        "PODUSAGE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_zero_argument_run_writes_csv(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(
        "podusage.infrastructure.kubectl_client.subprocess.run", _fake_run
    )
    result = runner.invoke(app, [])
    assert result.exit_code == 0, result.output
    lines = (tmp_path / "cpu_mem_usage.csv").read_text(encoding="utf-8").splitlines()
    assert lines == [
        "Namespace,PodName,ContainerName,CPU Usage,Memory Usage",
        "build-service",
        " ,pod-a, ,5m,10Mi",
        " , ,main,5m,10Mi",
    ]
    assert (tmp_path / "cpu_mem_usage_summary.md").exists()


def test_text_format_option(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        "podusage.infrastructure.kubectl_client.subprocess.run", _fake_run
    )
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["--format", "text", "--output-dir", str(out_dir)])
    assert result.exit_code == 0, result.output
    assert "Pod: pod-a" in (out_dir / "cpu_mem_usage2.txt").read_text(
        encoding="utf-8"
    )


def test_namespace_failure_exits_nonzero_without_report(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def failing_run(command: Sequence[str], **_: object) -> None:
        raise subprocess.CalledProcessError(
            1, list(command), stderr="Unable to connect to the server"
        )

    monkeypatch.setattr(
        "podusage.infrastructure.kubectl_client.subprocess.run", failing_run
    )
    result = runner.invoke(app, [])
    assert result.exit_code == 2
    assert "Unable to connect" in result.output
    assert not (tmp_path / "cpu_mem_usage.csv").exists()
    assert not (tmp_path / "cpu_mem_usage_summary.md").exists()


def test_report_write_failure_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(
        "podusage.infrastructure.kubectl_client.subprocess.run", _fake_run
    )
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    result = runner.invoke(app, ["--output-dir", str(blocker / "reports")])
    assert result.exit_code == 2
    assert "cannot write report" in result.output


def test_invalid_concurrency_exits_one() -> None:
    result = runner.invoke(app, ["--max-concurrency", "0"])
    assert result.exit_code == 1
    assert "max_concurrency" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "podusage" in result.output


def test_unexecutable_kubectl_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def denied_run(command: Sequence[str], **_: object) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(
        "podusage.infrastructure.kubectl_client.subprocess.run", denied_run
    )
    result = runner.invoke(app, [])
    assert result.exit_code == 2
    assert "cannot execute" in result.output
    assert not (tmp_path / "cpu_mem_usage.csv").exists()
