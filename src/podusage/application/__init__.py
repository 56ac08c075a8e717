"""Application facade exports for stable use-case API."""

from podusage.application.collect_use_case import CollectionReport, execute_collection
from podusage.application.collector import CollectionResult, PodMetricsCollector
from podusage.application.stdout_renderer import render_collection

__all__ = [
    "CollectionReport",
    "CollectionResult",
    "PodMetricsCollector",
    "execute_collection",
    "render_collection",
]
