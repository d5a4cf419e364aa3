# 🚨 netimage/errors/__init__.py
"""
🚨 Пакет помилок: термінальні винятки завантаження та коди для логів.
"""

from .custom_errors import CacheIOError, ErrorCode, FetchFailedError, ImageFetchError

__all__ = [
    "CacheIOError",
    "ErrorCode",
    "FetchFailedError",
    "ImageFetchError",
]
