"""Per-namespace CPU/memory totals computed from raw pod records."""

from collections.abc import Mapping

import pandas as pd

from podusage.domain.pod_metrics import PodMetric
from podusage.domain.quantity_parser import cpu_or_zero, memory_or_zero

TOTALS_COLUMNS = ["namespace", "pods", "containers", "cpu_m", "memory_mib"]


def build_namespace_totals(
    metrics: Mapping[str, tuple[PodMetric, ...]],
) -> pd.DataFrame:
    """Sum pod totals per namespace, sorted by CPU descending."""
    rows = [
        {
            "namespace": namespace,
            "containers": len(pod.containers),
            "cpu_m": cpu_or_zero(pod.total_cpu),
            "memory_mib": memory_or_zero(pod.total_memory) / 1024 / 1024,
        }
        for namespace, pods in metrics.items()
        for pod in pods
    ]
    if not rows:
        return pd.DataFrame(columns=TOTALS_COLUMNS)

    df = pd.DataFrame(rows)
    totals = (
        df.groupby("namespace")
        .agg(
            pods=("containers", "size"),
            containers=("containers", "sum"),
            cpu_m=("cpu_m", "sum"),
            memory_mib=("memory_mib", "sum"),
        )
        .round(1)
        .reset_index()
    )
    return totals.sort_values(
        ["cpu_m", "namespace"], ascending=[False, True]
    ).reset_index(drop=True)[TOTALS_COLUMNS]
