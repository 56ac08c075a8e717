"""Pod and container usage records as reported by the metrics API."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ContainerMetric:
    """Raw container usage strings, units included (e.g. ``12m``, ``34Mi``)."""

    name: str
    cpu: str
    memory: str


@dataclass(frozen=True)
class PodMetric:
    """Usage snapshot for one pod and its containers."""

    pod_name: str
    namespace: str
    containers: tuple[ContainerMetric, ...]
    total_cpu: str
    total_memory: str


@dataclass(frozen=True)
class SkippedUnit:
    """A namespace or pod dropped from the collection run."""

    kind: Literal["namespace", "pod"]
    namespace: str
    pod: str | None
    reason: str

    @property
    def label(self) -> str:
        """Return ``namespace`` or ``namespace/pod``."""
        if self.pod is None:
            return self.namespace
        return f"{self.namespace}/{self.pod}"
