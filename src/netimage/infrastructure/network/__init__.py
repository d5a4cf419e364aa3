# 🌐 netimage/infrastructure/network/__init__.py
"""
🌐 Мережевий шар: ретраї з експоненційним backoff та завантаження через `httpx`.
"""

from .backoff_retrier import HTTP_OK, BackoffPolicy, is_http_ok, retry
from .remote_fetcher import DEFAULT_HEADERS, RemoteFetcher

__all__ = [
    "BackoffPolicy",
    "DEFAULT_HEADERS",
    "HTTP_OK",
    "RemoteFetcher",
    "is_http_ok",
    "retry",
]
