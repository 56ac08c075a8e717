"""Lock-protected per-namespace collection of pod metrics."""

import threading

from podusage.domain.pod_metrics import PodMetric


class NamespaceAggregate:
    """Mapping of namespace -> pod metrics, shared by collection workers.

    Only ``append`` and ``snapshot`` touch the underlying map, both under a
    single lock. Records are never removed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pods: dict[str, list[PodMetric]] = {}

    def append(self, namespace: str, metric: PodMetric) -> None:
        """Append a pod record to its namespace."""
        with self._lock:
            self._pods.setdefault(namespace, []).append(metric)

    def snapshot(self) -> dict[str, tuple[PodMetric, ...]]:
        """Return a copy of the current contents."""
        with self._lock:
            return {ns: tuple(pods) for ns, pods in self._pods.items()}
