# 🧊 netimage/shared/utils/immutables.py
"""
🧊 Утиліти для «заморожених» HTTP-заголовків.

🔹 `freeze_headers` копіює заголовки в незмінний `MappingProxyType`.
🔹 `mapping_fingerprint` дає стабільний хеш мапи, незалежний від порядку ключів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping                      # 🧰 Перевірки типів колекцій
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any, Optional, Tuple                  # 🧰 Типи


def freeze_headers(headers: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, str]]:
    """🧊 Заморожує HTTP-заголовки; `None` лишається `None`, значення → `str`."""
    if headers is None:
        return None
    return MappingProxyType({str(key): str(value) for key, value in headers.items()})


def mapping_fingerprint(mapping: Optional[Mapping[Any, Any]]) -> Optional[Tuple[Tuple[Any, Any], ...]]:
    """🔑 Хешоване представлення мапи, незалежне від порядку ключів."""
    if mapping is None:
        return None
    return tuple(sorted(mapping.items(), key=lambda item: repr(item[0])))
