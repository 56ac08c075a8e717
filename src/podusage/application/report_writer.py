"""Report artifacts for a collection run."""

import csv
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from podusage.domain.pod_metrics import PodMetric, SkippedUnit

logger = logging.getLogger(__name__)

CSV_HEADER = ["Namespace", "PodName", "ContainerName", "CPU Usage", "Memory Usage"]
# Placeholder for hierarchy columns left blank in the CSV layout.
_BLANK = " "

PodMetrics = Mapping[str, tuple[PodMetric, ...]]


class ReportWriteError(RuntimeError):
    """Raised when a report artifact cannot be written."""


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def csv_rows(metrics: PodMetrics) -> list[list[str]]:
    """Build the hierarchical namespace / pod / container rows."""
    rows = [list(CSV_HEADER)]
    for namespace, pods in metrics.items():
        rows.append([namespace])
        for pod in pods:
            rows.append([_BLANK, pod.pod_name, _BLANK, pod.total_cpu, pod.total_memory])
            rows.extend(
                [_BLANK, _BLANK, container.name, container.cpu, container.memory]
                for container in pod.containers
            )
    return rows


def write_csv_report(metrics: PodMetrics, path: Path) -> Path:
    """Write metrics as CSV, replacing any previous file."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            csv.writer(handle).writerows(csv_rows(metrics))
    except OSError as exc:
        raise ReportWriteError(f"cannot write report {path}: {exc}") from exc
    logger.info("wrote %s", path)
    return path


def text_blocks(metrics: PodMetrics) -> list[str]:
    """Build one indented text block per pod."""
    blocks = []
    for namespace, pods in metrics.items():
        for pod in pods:
            lines = [f"Namespace: {namespace}  Pod: {pod.pod_name}"]
            lines.extend(
                f"    Container: {c.name}  CPU: {c.cpu}  Memory: {c.memory}"
                for c in pod.containers
            )
            lines.append(
                f"    Pod total  CPU: {pod.total_cpu}  Memory: {pod.total_memory}"
            )
            blocks.append("\n".join(lines) + "\n")
    return blocks


def write_text_report(metrics: PodMetrics, path: Path) -> Path:
    """Append metrics as indented text blocks."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            for block in text_blocks(metrics):
                handle.write(block + "\n")
    except OSError as exc:
        raise ReportWriteError(f"cannot write report {path}: {exc}") from exc
    logger.info("appended to %s", path)
    return path


def build_summary_lines(
    *,
    title: str,
    inputs: dict[str, Any],
    output_files: tuple[Path, ...],
    key_findings: list[str],
    skipped: tuple[SkippedUnit, ...],
) -> list[str]:
    """Build summary markdown lines."""
    lines = [f"# {title}", "", f"Generated: `{_utc_now_iso()}`", "", "## Inputs"]
    if inputs:
        for key in sorted(inputs):
            lines.append(f"- `{key}`: `{inputs[key]}`")
    else:
        lines.append("- (none)")

    lines.extend(["", "## Outputs"])
    if output_files:
        lines.extend(f"- `{p.name}`" for p in output_files)
    else:
        lines.append("- (none)")

    lines.extend(["", "## Key Findings"])
    if key_findings:
        lines.extend(f"- {item}" for item in key_findings)
    else:
        lines.append("- No additional findings were recorded.")

    lines.extend(["", "## Warnings"])
    if skipped:
        lines.append(f"- {len(skipped)} units skipped:")
        lines.extend(
            f"  - {unit.kind} `{unit.label}`: {unit.reason}" for unit in skipped
        )
    else:
        lines.append("- None.")

    return lines


def write_run_summary(path: Path, summary_lines: list[str]) -> Path:
    """Write summary markdown."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(summary_lines) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(f"cannot write summary {path}: {exc}") from exc
    return path
