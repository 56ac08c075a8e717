"""Namespace filtering helpers."""

SYSTEM_NAMESPACES: frozenset[str] = frozenset(
    {
        "kube-system",
        "kube-public",
        "kube-node-lease",
    }
)

SYSTEM_NAMESPACE_PREFIXES: tuple[str, ...] = ("kube-", "openshift-")


def is_system_namespace(namespace: str) -> bool:
    """Return whether namespace belongs to the cluster control plane."""
    return namespace in SYSTEM_NAMESPACES or namespace.startswith(
        SYSTEM_NAMESPACE_PREFIXES
    )
