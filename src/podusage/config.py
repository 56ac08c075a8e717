"""Application configuration and environment loading."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from dotenv import load_dotenv

ReportFormat = Literal["csv", "text"]

REPORT_FORMATS: tuple[str, ...] = ("csv", "text")
CSV_REPORT_NAME = "cpu_mem_usage.csv"
TEXT_REPORT_NAME = "cpu_mem_usage2.txt"
SUMMARY_NAME = "cpu_mem_usage_summary.md"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class CollectorConfig:
    """Settings for one collection run."""

    kubectl_binary: str = "kubectl"
    max_concurrency: int = 16
    report_format: ReportFormat = "csv"
    output_dir: Path = Path(".")
    exclude_system: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.max_concurrency < 1:
            raise ValueError(
                f"max_concurrency must be >= 1, got {self.max_concurrency}"
            )
        if self.report_format not in REPORT_FORMATS:
            raise ValueError(
                f"report format must be one of {', '.join(REPORT_FORMATS)}, "
                f"got {self.report_format!r}"
            )

    @property
    def report_path(self) -> Path:
        """Return the report artifact path for the configured format."""
        name = CSV_REPORT_NAME if self.report_format == "csv" else TEXT_REPORT_NAME
        return self.output_dir / name

    @property
    def summary_path(self) -> Path:
        """Return the run summary path."""
        return self.output_dir / SUMMARY_NAME


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_config(env_path: Path = Path(".env")) -> CollectorConfig:
    """Load config from environment and optional .env file."""
    load_dotenv(env_path, override=False)
    return CollectorConfig(
        kubectl_binary=os.getenv("PODUSAGE_KUBECTL") or "kubectl",
        max_concurrency=_env_int("PODUSAGE_MAX_CONCURRENCY", 16),
        report_format=cast(
            ReportFormat, (os.getenv("PODUSAGE_FORMAT") or "csv").strip().lower()
        ),
        output_dir=Path(os.getenv("PODUSAGE_OUTPUT_DIR") or "."),
        exclude_system=_env_bool("PODUSAGE_EXCLUDE_SYSTEM", False),
        log_level=(os.getenv("PODUSAGE_LOG_LEVEL") or "INFO").upper(),
    )
