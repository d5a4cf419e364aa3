# 📦 netimage/config/setup/container.py
"""
📦 Контейнер залежностей завантажувача зображень.

🔹 Створює сервіси в правильному порядку DI: логування → метрики → мережа → кеш → оркестратор
🔹 Інкапсулює конфігурацію HTTP-клієнта та каталогу кешу
🔹 `build_image_loader()`: коротка точка входу для бібліотечного використання
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
import tempfile                                                          # 📁 Системний tmp як корінь кешу
from pathlib import Path                                                 # 🛤️ Шлях до кешу
from typing import Any, Dict, Optional                                   # 🧮 Допоміжні типи

# 🌐 Зовнішні бібліотеки
import httpx                                                             # 🌐 Спільний HTTP-клієнт (опційно)

# 🧩 Внутрішні модулі проєкту
from netimage.config.config_service import ConfigService                 # ⚙️ Джерело конфігурацій
from netimage.infrastructure.cache.disk_cache import CACHE_SUBDIR, DiskCache  # 💾 Дисковий кеш
from netimage.infrastructure.network.remote_fetcher import DEFAULT_HEADERS, RemoteFetcher  # 📥 Мережевий шар
from netimage.infrastructure.services.image_loader import NetworkImageLoader  # 🖼️ Оркестратор
from netimage.shared.metrics.exporters import maybe_start_prometheus     # 📈 Bootstrap метрик
from netimage.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

logger = logging.getLogger(LOG_NAME)                                     # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _int_or_default(value: Any, default: int) -> int:
    """
    Повертає ціле число або запасне значення, якщо каст неможливий.
    """
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def resolve_cache_root(config: ConfigService) -> Path:
    """
    Корінь кешу з конфігу; порожнє значення → системний tmp.
    """
    raw = config.get("cache.root_dir") or ""
    return Path(str(raw)).expanduser() if str(raw).strip() else Path(tempfile.gettempdir())


def default_headers_from(config: ConfigService) -> Dict[str, str]:
    """
    Базові заголовки HTTP: User-Agent та Accept із конфігу поверх дефолтних.
    """
    headers = dict(DEFAULT_HEADERS)
    user_agent = config.get("http.user_agent")
    accept = config.get("http.accept")
    if user_agent:
        headers["User-Agent"] = str(user_agent)
    if accept:
        headers["Accept"] = str(accept)
    return headers


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """
    Координує ініціалізацію логування, метрик та сервісів завантаження.
    """

    def __init__(
        self,
        config: Optional[ConfigService] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        configure_logging: bool = True,
    ):
        self.config = config or ConfigService()                           # ⚙️ Джерело конфігурацій DI
        if configure_logging:
            init_logging_from_config(self.config.get("logging", {}) or {})
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self._bootstrap_metrics_if_enabled()
        self._setup_services(client)
        logger.info("✅ Контейнер ініціалізовано успішно")

    # ================================
    # 📈 МЕТРИКИ
    # ================================
    def _bootstrap_metrics_if_enabled(self) -> None:
        """
        Стартує Prometheus-експортер, якщо це дозволено конфігурацією.
        """
        try:
            if not bool(self.config.get("metrics.enabled", False)):
                logger.debug("📉 Prometheus вимкнено конфігом")
                return
            exporter_name = (self.config.get("metrics.exporter", "prometheus") or "prometheus").lower()
            if exporter_name != "prometheus":
                logger.debug("📉 Експортер %s не підтримується", exporter_name)
                return
            port = _int_or_default(self.config.get("metrics.prometheus.port", 9108), 9108)
            if maybe_start_prometheus(port):
                logger.info("📈 Prometheus запущено на порті %s", port)
        except Exception:                                                # ⚠️ Метрики не мають валити складання
            logger.exception("⚠️ Не вдалося стартувати експортер метрик")

    # ================================
    # 🧰 СЕРВІСИ
    # ================================
    def _setup_services(self, client: Optional[httpx.AsyncClient]) -> None:
        self.cache_root = resolve_cache_root(self.config)                # 📁 Корінь кешу
        subdir = str(self.config.get("cache.subdir") or CACHE_SUBDIR)
        self.remote_fetcher = RemoteFetcher(
            client,
            default_headers=default_headers_from(self.config),
        )
        self.disk_cache = DiskCache(self.cache_root, self.remote_fetcher, subdir=subdir)
        self.image_loader = NetworkImageLoader(self.remote_fetcher, self.disk_cache)
        logger.debug("💾 Кеш зображень: %s", self.disk_cache.cache_dir)


def build_image_loader(
    config: Optional[ConfigService] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> NetworkImageLoader:
    """
    Складає готовий `NetworkImageLoader` (мережа + дисковий кеш) за конфігом.
    """
    return Container(config, client=client).image_loader


__all__ = ["Container", "build_image_loader", "default_headers_from", "resolve_cache_root"]
