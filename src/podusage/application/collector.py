"""Concurrent namespace -> pod -> PodMetrics collection."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from podusage.domain.metric_parser import (
    MetricParseError,
    parse_container_metrics,
    parse_pod_totals,
)
from podusage.domain.namespace_aggregate import NamespaceAggregate
from podusage.domain.pod_metrics import PodMetric, SkippedUnit
from podusage.infrastructure.kubectl_client import (
    KubectlError,
    Runner,
    kubectl_text,
    namespaces_args,
    pod_metrics_summary_args,
    pod_metrics_yaml_args,
    pods_args,
    split_names,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionResult:
    """Outcome of a completed collection run."""

    metrics: dict[str, tuple[PodMetric, ...]]
    skipped: tuple[SkippedUnit, ...]
    namespaces: tuple[str, ...]

    @property
    def pod_count(self) -> int:
        """Return number of collected pods."""
        return sum(len(pods) for pods in self.metrics.values())

    @property
    def container_count(self) -> int:
        """Return number of collected containers."""
        return sum(
            len(pod.containers) for pods in self.metrics.values() for pod in pods
        )


class PodMetricsCollector:
    """Fan out over namespaces and pods, fan results into an aggregate.

    Every namespace gets its own task, and every pod in it a further task;
    ``run`` returns only after all of them have finished. kubectl calls
    block in worker threads, at most ``max_concurrency`` at a time.
    """

    def __init__(
        self,
        aggregate: NamespaceAggregate,
        *,
        max_concurrency: int = 16,
        kubectl_binary: str = "kubectl",
        namespace_filter: Callable[[str], bool] | None = None,
        runner: Runner = kubectl_text,
    ):
        self.aggregate = aggregate
        self.max_concurrency = max_concurrency
        self.kubectl_binary = kubectl_binary
        self.namespace_filter = namespace_filter
        self._runner = runner
        self._skipped: list[SkippedUnit] = []
        self._semaphore: asyncio.Semaphore | None = None

    async def _kubectl(self, args: Sequence[str]) -> str:
        if self._semaphore is None:
            raise RuntimeError("collector is not running")
        async with self._semaphore:
            return await asyncio.to_thread(
                self._runner, args, binary=self.kubectl_binary
            )

    def _skip(self, namespace: str, pod: str | None, exc: Exception) -> None:
        unit = SkippedUnit(
            kind="namespace" if pod is None else "pod",
            namespace=namespace,
            pod=pod,
            reason=str(exc),
        )
        logger.warning("skipping %s %s: %s", unit.kind, unit.label, unit.reason)
        self._skipped.append(unit)

    async def list_namespaces(self) -> list[str]:
        """List namespace names; kubectl failure propagates."""
        namespaces = split_names(await self._kubectl(namespaces_args()))
        if self.namespace_filter is not None:
            namespaces = [ns for ns in namespaces if self.namespace_filter(ns)]
        return namespaces

    async def run(self) -> CollectionResult:
        """Collect metrics for every pod in every namespace."""
        self._semaphore = asyncio.Semaphore(self.max_concurrency)
        self._skipped = []

        namespaces = await self.list_namespaces()
        logger.info("collecting metrics from %d namespaces", len(namespaces))

        async with asyncio.TaskGroup() as tg:
            for namespace in namespaces:
                tg.create_task(self._collect_namespace(namespace))

        return CollectionResult(
            metrics=self.aggregate.snapshot(),
            skipped=tuple(self._skipped),
            namespaces=tuple(namespaces),
        )

    async def _collect_namespace(self, namespace: str) -> None:
        try:
            pods = split_names(await self._kubectl(pods_args(namespace)))
        except KubectlError as exc:
            self._skip(namespace, None, exc)
            return

        logger.debug("namespace %s: %d pods", namespace, len(pods))
        async with asyncio.TaskGroup() as tg:
            for pod in pods:
                tg.create_task(self._collect_pod(namespace, pod))

    async def _collect_pod(self, namespace: str, pod: str) -> None:
        try:
            metric = await self.fetch_pod_metric(namespace, pod)
        except (KubectlError, MetricParseError) as exc:
            self._skip(namespace, pod, exc)
            return
        self.aggregate.append(namespace, metric)

    async def fetch_pod_metric(self, namespace: str, pod: str) -> PodMetric:
        """Fetch both PodMetrics views of one pod and combine them."""
        outcomes = await asyncio.gather(
            self._kubectl(pod_metrics_yaml_args(pod, namespace)),
            self._kubectl(pod_metrics_summary_args(pod, namespace)),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        document, summary = outcomes

        containers = parse_container_metrics(str(document))
        total_cpu, total_memory = parse_pod_totals(str(summary))
        return PodMetric(
            pod_name=pod,
            namespace=namespace,
            containers=containers,
            total_cpu=total_cpu,
            total_memory=total_memory,
        )
