# 📈 netimage/shared/metrics/exporters.py
"""
📈 Запуск HTTP-експортера Prometheus (один раз на процес).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
import threading

# 🌐 Зовнішні бібліотеки
from prometheus_client import start_http_server

logger = logging.getLogger("netimage.metrics")

_started_port: int | None = None
_lock = threading.Lock()


def maybe_start_prometheus(port: int) -> bool:
    """
    Стартує експортер на `port`, якщо він ще не запущений.

    Returns:
        bool: True, якщо саме цей виклик підняв сервер.
    """
    global _started_port
    with _lock:
        if _started_port is not None:
            logger.debug("📈 Експортер уже працює на порті %s", _started_port)
            return False
        start_http_server(port)
        _started_port = port
        return True
