"""Tests for the shared namespace aggregate."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from podusage.domain.namespace_aggregate import NamespaceAggregate
from podusage.domain.pod_metrics import PodMetric


def _pod(name: str, namespace: str = "ns") -> PodMetric:
    return PodMetric(
        pod_name=name,
        namespace=namespace,
        containers=(),
        total_cpu="1m",
        total_memory="1Mi",
    )


def test_append_creates_namespace() -> None:
    aggregate = NamespaceAggregate()
    aggregate.append("a", _pod("p1", "a"))
    aggregate.append("b", _pod("p2", "b"))
    aggregate.append("a", _pod("p3", "a"))
    snapshot = aggregate.snapshot()
    assert set(snapshot) == {"a", "b"}
    assert [p.pod_name for p in snapshot["a"]] == ["p1", "p3"]


def test_snapshot_is_a_copy() -> None:
    aggregate = NamespaceAggregate()
    aggregate.append("a", _pod("p1", "a"))
    snapshot = aggregate.snapshot()
    aggregate.append("a", _pod("p2", "a"))
    assert len(snapshot["a"]) == 1
    assert len(aggregate.snapshot()["a"]) == 2


def test_concurrent_appends_lose_nothing() -> None:
    aggregate = NamespaceAggregate()
    count = 500
    with ThreadPoolExecutor(max_workers=32) as executor:
        for idx in range(count):
            executor.submit(aggregate.append, "shared", _pod(f"pod-{idx}", "shared"))
    pods = aggregate.snapshot()["shared"]
    assert len(pods) == count
    assert {p.pod_name for p in pods} == {f"pod-{idx}" for idx in range(count)}
