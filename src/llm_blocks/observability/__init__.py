from . import names
from .base import MetricsHook, NoOpMetricsHook, elapsed_ms

__all__ = [
    "MetricsHook",
    "NoOpMetricsHook",
    "elapsed_ms",
    "names",
]
