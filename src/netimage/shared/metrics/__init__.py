# 📊 netimage/shared/metrics/__init__.py
"""
📊 Пакет метрик Prometheus для завантажувача зображень.
"""

from __future__ import annotations

from .exporters import maybe_start_prometheus
from .fetch import (
    ATTEMPT_FAILURES,
    CACHE_HITS,
    CACHE_MISSES,
    CACHE_WRITES,
    FALLBACK_SERVED,
    FETCH_FAILED,
    FETCH_LATENCY,
    FETCH_OK,
)

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    "ATTEMPT_FAILURES",
    "CACHE_HITS",
    "CACHE_MISSES",
    "CACHE_WRITES",
    "FALLBACK_SERVED",
    "FETCH_FAILED",
    "FETCH_LATENCY",
    "FETCH_OK",
    "maybe_start_prometheus",
]
