# 🧰 netimage/shared/utils/__init__.py
"""
🧰 Пакет спільних утиліт: логування та заморожені заголовки.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

# 🧊 Незмінні заголовки
from .immutables import freeze_headers, mapping_fingerprint

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    # logging
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    # immutables
    "freeze_headers",
    "mapping_fingerprint",
]
