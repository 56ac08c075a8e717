"""Parsers for Kubernetes resource quantity strings."""

_CPU_DIVISORS = {"m": 1, "u": 1000, "n": 1_000_000}

_MEMORY_MULTIPLIERS = {
    "KI": 1024,
    "MI": 1024**2,
    "GI": 1024**3,
    "TI": 1024**4,
    "K": 1000,
    "M": 1000**2,
    "G": 1000**3,
    "T": 1000**4,
}

_EMPTY = {"", "0", "<none>"}


def parse_cpu(cpu_str: str) -> float:
    """Parse CPU quantity and return millicores."""
    value = str(cpu_str).lower().strip()
    if value in _EMPTY:
        return 0.0
    divisor = _CPU_DIVISORS.get(value[-1])
    if divisor is not None:
        return float(value[:-1]) / divisor
    return float(value) * 1000


def parse_memory(memory_str: str) -> int:
    """Parse memory quantity and return bytes."""
    raw = str(memory_str).strip()
    if raw in _EMPTY:
        return 0
    # lowercase m is millibytes, uppercase M is megabytes
    if raw.endswith("m"):
        return int(float(raw[:-1]) / 1000)

    value = raw.upper()
    for suffix, multiplier in _MEMORY_MULTIPLIERS.items():
        if value.endswith(suffix):
            return int(float(value[: -len(suffix)]) * multiplier)
    return int(float(value))


def cpu_or_zero(cpu_str: str) -> float:
    """Like ``parse_cpu`` but unparsable values count as zero."""
    try:
        return parse_cpu(cpu_str)
    except ValueError:
        return 0.0


def memory_or_zero(memory_str: str) -> int:
    """Like ``parse_memory`` but unparsable values count as zero."""
    try:
        return parse_memory(memory_str)
    except ValueError:
        return 0
