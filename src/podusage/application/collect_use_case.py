"""Pod usage collection use-case."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from podusage.application.collector import CollectionResult, PodMetricsCollector
from podusage.application.report_writer import (
    build_summary_lines,
    write_csv_report,
    write_run_summary,
    write_text_report,
)
from podusage.config import CollectorConfig
from podusage.domain.namespace_aggregate import NamespaceAggregate
from podusage.domain.namespace_policy import is_system_namespace
from podusage.infrastructure.kubectl_client import Runner, kubectl_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionReport:
    """Collection result plus the artifacts written for it."""

    result: CollectionResult
    report_path: Path
    summary_path: Path


def _is_user_namespace(namespace: str) -> bool:
    return not is_system_namespace(namespace)


def _collector(config: CollectorConfig, runner: Runner) -> PodMetricsCollector:
    return PodMetricsCollector(
        NamespaceAggregate(),
        max_concurrency=config.max_concurrency,
        kubectl_binary=config.kubectl_binary,
        namespace_filter=_is_user_namespace if config.exclude_system else None,
        runner=runner,
    )


def execute_collection(
    config: CollectorConfig, *, runner: Runner = kubectl_text
) -> CollectionReport:
    """Collect pod usage and write the report and run summary.

    Namespace listing failures raise before any file is written.
    """
    result = asyncio.run(_collector(config, runner).run())
    logger.info(
        "collected %d pods, skipped %d units", result.pod_count, len(result.skipped)
    )

    if config.report_format == "csv":
        report_path = write_csv_report(result.metrics, config.report_path)
    else:
        report_path = write_text_report(result.metrics, config.report_path)

    summary_lines = build_summary_lines(
        title="Pod CPU/Memory Usage",
        inputs={
            "format": config.report_format,
            "max_concurrency": config.max_concurrency,
            "exclude_system": config.exclude_system,
        },
        output_files=(report_path,),
        key_findings=[
            f"Namespaces listed: {len(result.namespaces)}",
            f"Namespaces with metrics: {len(result.metrics)}",
            f"Pods collected: {result.pod_count}",
            f"Containers collected: {result.container_count}",
        ],
        skipped=result.skipped,
    )
    summary_path = write_run_summary(config.summary_path, summary_lines)
    return CollectionReport(
        result=result, report_path=report_path, summary_path=summary_path
    )
