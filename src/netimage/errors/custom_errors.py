# 🚨 netimage/errors/custom_errors.py
"""
🚨 Ієрархія винятків завантажувача зображень.

🔹 Назовні піднімається лише термінальна помилка (`FetchFailedError`) та її
   файлова різновидність (`CacheIOError`).
🔹 Транзієнтні мережеві збої та вичерпані ретраї не є винятками: вони
   логуються й повертаються як `None`.
🔹 Кожен виняток уміє віддати `to_log_extra()` для структурованих логів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення помилок
from pathlib import Path											# 🛤️ Шлях до файлу кешу
from typing import Dict, Optional, Union							# 📐 Типізація

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger("netimage.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Стабільні коди для логів і метрик."""

    FETCH_FAILED = "fetch_failed"									# 🌐 Ні мережа, ні fallback
    CACHE_IO = "cache_io"											# 💽 Збій файлової системи кешу
    RETRIES_EXHAUSTED = "retries_exhausted"						# 🔁 Усі спроби невдалі (не виняток)


# ================================
# 🧠 БАЗОВИЙ ВИНЯТОК
# ================================
class ImageFetchError(Exception):
    """🧠 Базовий клас усіх помилок бібліотеки."""

    code: str = ErrorCode.FETCH_FAILED

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.extra`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


# ================================
# 🌐 ТЕРМІНАЛЬНА ПОМИЛКА
# ================================
class FetchFailedError(ImageFetchError):
    """🌐 Зображення не отримано і fallback не налаштовано."""

    def __init__(self, url: str, message: Optional[str] = None, *, details: Optional[str] = None) -> None:
        super().__init__(message or f"Failed to load {url}.", details=details)
        self.url = url												# 🔗 URL для діагностики
        logger.debug("🌐 FetchFailedError created", extra={"url": url, "details": details})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["url"] = self.url
        return extra


class CacheIOError(FetchFailedError):
    """💽 Помилка читання/запису дискового кешу (не плутати з cache miss)."""

    code = ErrorCode.CACHE_IO

    def __init__(
        self,
        url: str,
        path: Union[str, Path, None],
        *,
        details: Optional[str] = None,
    ) -> None:
        self.path = Path(path) if path is not None else None		# 📁 Файл або каталог кешу
        super().__init__(url, f"Disk cache I/O failed for {url} ({self.path}).", details=details)

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.path is not None:
            extra["path"] = str(self.path)
        return extra


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "CacheIOError",
    "ErrorCode",
    "FetchFailedError",
    "ImageFetchError",
]
