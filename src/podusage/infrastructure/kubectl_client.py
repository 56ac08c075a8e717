"""Shared kubectl execution helpers."""

import logging
import subprocess
from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)

_NAME_COLUMN = "custom-columns=:metadata.name"

Runner = Callable[..., str]


class KubectlError(RuntimeError):
    """Raised when kubectl command execution fails."""

    def __init__(self, message: str, *, args: Sequence[str] = (), stderr: str = ""):
        super().__init__(message)
        self.command = tuple(args)
        self.stderr = stderr


def kubectl_text(args: Sequence[str], *, binary: str = "kubectl") -> str:
    """Execute kubectl with an argument vector and return raw stdout.

    Stdout is returned verbatim, trailing newline included.
    """
    command = [binary, *args]
    logger.debug("running %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        stderr = exc.stderr.strip() if exc.stderr else str(exc)
        raise KubectlError(
            f"kubectl command failed: {stderr}", args=args, stderr=stderr
        ) from exc
    except FileNotFoundError as exc:
        raise KubectlError(
            f"kubectl binary not found: {binary}", args=args, stderr=str(exc)
        ) from exc
    except OSError as exc:
        raise KubectlError(
            f"cannot execute {binary}: {exc}", args=args, stderr=str(exc)
        ) from exc
    except UnicodeDecodeError as exc:
        raise KubectlError(
            f"kubectl output is not valid text: {exc}", args=args, stderr=str(exc)
        ) from exc
    return result.stdout


def split_names(output: str) -> list[str]:
    """Split a one-name-per-line listing, dropping blank lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def namespaces_args() -> list[str]:
    return ["get", "ns", "--no-headers", "-o", _NAME_COLUMN]


def pods_args(namespace: str) -> list[str]:
    return ["get", "pods", "-n", namespace, "--no-headers", "-o", _NAME_COLUMN]


def pod_metrics_yaml_args(pod: str, namespace: str) -> list[str]:
    return ["get", "PodMetrics", pod, "-n", namespace, "-oyaml"]


def pod_metrics_summary_args(pod: str, namespace: str) -> list[str]:
    return ["get", "PodMetrics", pod, "-n", namespace, "--no-headers"]
