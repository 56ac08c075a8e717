"""Parsers for kubectl PodMetrics output."""

import re
from typing import Any

import yaml

from podusage.domain.pod_metrics import ContainerMetric

_COLUMN_SEPARATOR = re.compile(r" {2,}")


class MetricParseError(ValueError):
    """Raised when PodMetrics output cannot be decoded."""


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_container(entry: Any, index: int) -> ContainerMetric:
    if not isinstance(entry, dict):
        raise MetricParseError(f"containers[{index}] is not a mapping")
    usage = entry.get("usage") or {}
    if not isinstance(usage, dict):
        raise MetricParseError(f"containers[{index}].usage is not a mapping")
    return ContainerMetric(
        name=_as_text(entry.get("name")),
        cpu=_as_text(usage.get("cpu")),
        memory=_as_text(usage.get("memory")),
    )


def parse_container_metrics(document: str) -> tuple[ContainerMetric, ...]:
    """Extract per-container usage from a ``-oyaml`` PodMetrics document.

    Unknown fields are ignored; missing name/cpu/memory become empty strings.
    """
    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as exc:
        raise MetricParseError(f"invalid PodMetrics YAML: {exc}") from exc

    if data is None:
        return ()
    if not isinstance(data, dict):
        raise MetricParseError("PodMetrics document is not a mapping")

    containers = data.get("containers") or []
    if not isinstance(containers, list):
        raise MetricParseError("PodMetrics 'containers' is not a list")
    return tuple(_parse_container(entry, idx) for idx, entry in enumerate(containers))


def parse_pod_totals(line: str) -> tuple[str, str]:
    """Return ``(total_cpu, total_memory)`` from a ``--no-headers`` row.

    Columns are separated by runs of two or more spaces:
    ``NAME  CPU  MEMORY  WINDOW``.
    """
    fields = _COLUMN_SEPARATOR.split(line.strip())
    if len(fields) < 3:
        raise MetricParseError(
            f"malformed row: expected at least 3 columns, got {len(fields)}: {line!r}"
        )
    return fields[1].strip(), fields[2].strip()
