# 📈 netimage/shared/metrics/fetch.py
"""
📈 Prometheus-метрики пайплайна «кеш → мережа → ретраї».

🔹 `FETCH_OK` / `FETCH_FAILED`: підсумок завантаження на рівні оркестратора.
🔹 `ATTEMPT_FAILURES`: невдалі окремі спроби (з причиною).
🔹 `CACHE_HITS` / `CACHE_MISSES` / `CACHE_WRITES`: робота дискового кешу.
🔹 `FALLBACK_SERVED`: скільки разів віддали fallback-зображення.
🔹 `FETCH_LATENCY`: тривалість мережевого завантаження з урахуванням ретраїв.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram                      # 📊 Prometheus-метрики

# ================================
# 📊 ЛІЧИЛЬНИКИ ОРКЕСТРАТОРА
# ================================
FETCH_OK = Counter(
    "netimage_fetch_ok_total",
    "Image loads that produced bytes",
    ["source"],                                                      # 🏷️ cache | network
)

FETCH_FAILED = Counter(
    "netimage_fetch_failed_total",
    "Image loads that ended without bytes from cache or network",
)

FALLBACK_SERVED = Counter(
    "netimage_fallback_served_total",
    "Loads answered with the configured fallback image",
)

# ================================
# 🔁 РЕТРАЇ
# ================================
ATTEMPT_FAILURES = Counter(
    "netimage_fetch_attempt_failures_total",
    "Failed single network attempts by reason",
    ["reason"],                                                      # 🏷️ http_status | timeout | transport
)

FETCH_LATENCY = Histogram(
    "netimage_remote_fetch_seconds",
    "Wall time of a remote fetch including retries and backoff",
)

# ================================
# 💾 ДИСКОВИЙ КЕШ
# ================================
CACHE_HITS = Counter(
    "netimage_cache_hits_total",
    "Disk cache hits",
)

CACHE_MISSES = Counter(
    "netimage_cache_misses_total",
    "Disk cache misses",
)

CACHE_WRITES = Counter(
    "netimage_cache_writes_total",
    "Payloads written to the disk cache",
)


__all__ = [
    "ATTEMPT_FAILURES",
    "CACHE_HITS",
    "CACHE_MISSES",
    "CACHE_WRITES",
    "FALLBACK_SERVED",
    "FETCH_FAILED",
    "FETCH_LATENCY",
    "FETCH_OK",
]
