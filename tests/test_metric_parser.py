"""Tests for PodMetrics output parsers."""

from __future__ import annotations

import pytest

from podusage.domain.metric_parser import (
    MetricParseError,
    parse_container_metrics,
    parse_pod_totals,
)
from podusage.domain.pod_metrics import ContainerMetric

POD_METRICS_YAML = """\
apiVersion: metrics.k8s.io/v1beta1
containers:
- name: main
  usage:
    cpu: 4876311n
    memory: 10240Ki
- name: sidecar
  usage:
    cpu: 1m
    memory: 2Mi
kind: PodMetrics
metadata:
  creationTimestamp: "2024-01-01T00:00:00Z"
  labels:
    app: demo
  name: pod-a
  namespace: build-service
timestamp: "2024-01-01T00:00:00Z"
window: 15s
"""


def test_parse_container_metrics() -> None:
    assert parse_container_metrics(POD_METRICS_YAML) == (
        ContainerMetric(name="main", cpu="4876311n", memory="10240Ki"),
        ContainerMetric(name="sidecar", cpu="1m", memory="2Mi"),
    )


def test_parse_container_metrics_ignores_unknown_fields() -> None:
    document = (
        "containers:\n"
        "- name: main\n"
        "  extra: field\n"
        "  usage: {cpu: 5m, memory: 10Mi, ephemeral: 1Gi}\n"
        "somethingNew: true\n"
    )
    assert parse_container_metrics(document) == (
        ContainerMetric(name="main", cpu="5m", memory="10Mi"),
    )


def test_parse_container_metrics_missing_usage() -> None:
    assert parse_container_metrics("containers:\n- name: main\n") == (
        ContainerMetric(name="main", cpu="", memory=""),
    )


def test_parse_container_metrics_empty_document() -> None:
    assert parse_container_metrics("") == ()
    assert parse_container_metrics("kind: PodMetrics\n") == ()


@pytest.mark.parametrize(
    "document",
    [
        "containers: [name: main\n",
        "- just\n- a list\n",
        "containers: main\n",
        "containers:\n- plain-string\n",
        "containers:\n- name: main\n  usage: 5m\n",
    ],
)
def test_parse_container_metrics_malformed(document: str) -> None:
    with pytest.raises(MetricParseError):
        parse_container_metrics(document)


def test_parse_pod_totals() -> None:
    assert parse_pod_totals("pod-a   5m    10Mi      15s\n") == ("5m", "10Mi")


def test_parse_pod_totals_exactly_three_fields() -> None:
    assert parse_pod_totals("pod-a  250m  1Gi") == ("250m", "1Gi")


@pytest.mark.parametrize("line", ["", "\n", "pod-a", "pod-a  5m", "pod-a 5m 10Mi"])
def test_parse_pod_totals_malformed_row(line: str) -> None:
    with pytest.raises(MetricParseError, match="malformed row"):
        parse_pod_totals(line)
