# 📦 netimage/domain/image_fetch/entities.py
"""
📦 Доменна сутність запиту на завантаження зображення.

🔹 `FetchRequest`: іммʼютабельний value-object: URL + мережеві параметри +
   кеш-прапорець + колбеки + fallback.
🔹 Рівність і хеш рахуються за полями ідентичності (url, scale, headers,
   use_disk_cache, retry_limit, retry_duration); таймаут, множник затримки,
   fallback та колбеки до ідентичності не входять.
🔹 Тривалості зберігаються в секундах (`float`), `timedelta` також приймається.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування валідації
from dataclasses import dataclass, field                            # 🧱 Опис сутності
from datetime import timedelta                                      # ⏱️ Альтернативний формат тривалостей
from typing import Any, Awaitable, Callable, Mapping, NamedTuple, Optional, Union  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from netimage.domain.image_fetch.cache_key import cache_key_for     # 🔑 Відбиток URL
from netimage.shared.utils.immutables import freeze_headers, mapping_fingerprint  # 🧊 Заморожені заголовки

# ================================
# 🪵 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(__name__)


# ================================
# 📏 ДЕФОЛТИ
# ================================
DEFAULT_SCALE = 1.0                                                 # 🔍 Масштаб для шару відображення
DEFAULT_RETRY_LIMIT = 5                                             # 🔁 Кількість повторів після першої спроби
DEFAULT_RETRY_DURATION_S = 0.5                                      # 🐢 Базова затримка між спробами
DEFAULT_RETRY_DURATION_FACTOR = 1.5                                 # 📈 Множник експоненційного backoff
DEFAULT_TIMEOUT_S = 5.0                                             # ⏳ Таймаут однієї спроби

Duration = Union[float, int, timedelta]                             # ⏱️ Секунди або timedelta
Callback = Callable[[], Union[None, Awaitable[Any]]]                # 📣 Fire-and-forget колбек


def _to_seconds(value: Duration, *, name: str) -> float:
    """⏱️ Нормалізує тривалість у секунди."""
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be seconds or timedelta, got {type(value).__name__}")
    return float(value)


# ================================
# 🌐 VALUE OBJECT: FETCH REQUEST
# ================================
@dataclass(frozen=True)
class FetchRequest:
    """
    Іммʼютабельний опис одного завантаження зображення.

    `retry_limit` може бути відʼємним: мережевий шар трактує його як 0.
    """

    url: str                                                        # 🌐 Джерело зображення
    scale: float = DEFAULT_SCALE                                    # 🔍 Масштаб (передається шару відображення)
    headers: Optional[Mapping[str, str]] = None                     # 📨 HTTP-заголовки запиту
    use_disk_cache: bool = False                                    # 💾 Чи використовувати дисковий кеш
    retry_limit: int = DEFAULT_RETRY_LIMIT                          # 🔁 Повтори після першої спроби
    retry_duration: Duration = DEFAULT_RETRY_DURATION_S             # 🐢 Базова затримка (с)
    retry_duration_factor: float = field(default=DEFAULT_RETRY_DURATION_FACTOR, compare=False)
    timeout_duration: Duration = field(default=DEFAULT_TIMEOUT_S, compare=False)
    on_loaded: Optional[Callback] = field(default=None, compare=False, repr=False)
    on_failed: Optional[Callback] = field(default=None, compare=False, repr=False)
    fallback_image: Optional[bytes] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.url, str) or not self.url.strip():
            logger.error("❌ FetchRequest: порожній URL %r", self.url)
            raise ValueError("FetchRequest.url must be a non-empty string")

        retry_duration = _to_seconds(self.retry_duration, name="retry_duration")
        timeout_duration = _to_seconds(self.timeout_duration, name="timeout_duration")
        if retry_duration < 0:
            raise ValueError(f"retry_duration must be >= 0, got {retry_duration}")
        if timeout_duration <= 0:
            raise ValueError(f"timeout_duration must be > 0, got {timeout_duration}")

        factor = float(self.retry_duration_factor)
        if factor < 1.0:
            raise ValueError(f"retry_duration_factor must be >= 1, got {factor}")

        fallback = self.fallback_image
        if fallback is not None and not isinstance(fallback, bytes):
            fallback = bytes(fallback)                              # 🧊 bytearray/memoryview → bytes

        # 🔐 Фіксуємо нормалізовані значення
        object.__setattr__(self, "scale", float(self.scale))
        object.__setattr__(self, "headers", freeze_headers(self.headers))
        object.__setattr__(self, "use_disk_cache", bool(self.use_disk_cache))
        object.__setattr__(self, "retry_limit", int(self.retry_limit))
        object.__setattr__(self, "retry_duration", retry_duration)
        object.__setattr__(self, "retry_duration_factor", factor)
        object.__setattr__(self, "timeout_duration", timeout_duration)
        object.__setattr__(self, "fallback_image", fallback)

    def __hash__(self) -> int:
        return hash(
            (
                self.url,
                self.scale,
                mapping_fingerprint(self.headers),
                self.use_disk_cache,
                self.retry_limit,
                self.retry_duration,
            )
        )

    @property
    def cache_key(self) -> str:
        """🔑 Відбиток URL (імʼя файлу в кеші)."""
        return cache_key_for(self.url)

    def __str__(self) -> str:
        return self.url


# ================================
# 💾 РЕЗУЛЬТАТ ДИСКОВОГО КЕШУ
# ================================
SOURCE_CACHE = "cache"                                              # 💾 Байти прочитано з диска
SOURCE_NETWORK = "network"                                          # 🌐 Байти завантажено з мережі


class CacheLookup(NamedTuple):
    """Байти (або None) та джерело, з якого їх отримано."""

    data: Optional[bytes]
    source: str


__all__ = [
    "CacheLookup",
    "Callback",
    "DEFAULT_RETRY_DURATION_FACTOR",
    "DEFAULT_RETRY_DURATION_S",
    "DEFAULT_RETRY_LIMIT",
    "DEFAULT_SCALE",
    "DEFAULT_TIMEOUT_S",
    "Duration",
    "FetchRequest",
    "SOURCE_CACHE",
    "SOURCE_NETWORK",
]
