"""Factory for creating state store backends."""

from typing import Any

from .base import StateStore


def create_state_store(
    backend: str = "json",
    **kwargs: Any
) -> StateStore:
    """Create a state store backend.

    Args:
        backend: Backend type ("json" or "memory")
        **kwargs: Backend-specific configuration
            For json:
                - path: str | Path (required)
            For memory:
                - initial: dict | None

    Returns:
        StateStore instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    if backend == "json":
        if "path" not in kwargs:
            raise TypeError("JSON state store requires 'path'")
        from .json_file import JsonFileStateStore
        return JsonFileStateStore(**kwargs)

    elif backend == "memory":
        from .in_memory import InMemoryStateStore
        return InMemoryStateStore(**kwargs)

    raise ValueError(
        f"Unsupported state store backend: {backend}. "
        f"Supported backends: json, memory"
    )
