from chronoatlas.dependencies.orchestrator import (
    build_cache_gateway,
    build_orchestrator,
    get_orchestrator,
)

__all__ = [
    "build_cache_gateway",
    "build_orchestrator",
    "get_orchestrator",
]
