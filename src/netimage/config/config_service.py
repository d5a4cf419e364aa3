# ⚙️ config_service.py
"""
⚙️ config_service.py: Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з config.yaml та змінних середовища (.env).
- Надає єдиний метод .get() для доступу до будь-якого параметра за крапковим ключем.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import os                                   # 📁 Доступ до змінних середовища
import logging                              # 🧾 Логування
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional      # 🧩 Типізація

logger = logging.getLogger("netimage.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# 🔐 Змінна середовища → крапковий ключ конфігурації
ENV_OVERRIDES: Dict[str, str] = {
    "NETIMAGE_CACHE_DIR": "cache.root_dir",
    "NETIMAGE_USER_AGENT": "http.user_agent",
    "NETIMAGE_LOG_LEVEL": "logging.level",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до конфігураційних параметрів бібліотеки.
    Працює як Singleton: конфігурація зчитується лише один раз (або через reload()).
    """

    _instance: Optional["ConfigService"] = None     # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                         # 📦 Обʼєднана конфігурація

    def __new__(cls):
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = {}
            cls._instance._load_all_configs(DEFAULT_CONFIG_PATH)
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    def reload(self, yaml_path: Optional[Path] = None) -> "ConfigService":
        """🔁 Перечитує конфігурацію (наприклад, після зміни змінних середовища)."""
        self._config = {}
        self._load_all_configs(yaml_path or DEFAULT_CONFIG_PATH)
        return self

    def _load_all_configs(self, yaml_path: Path) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет (останній перемагає): config.yaml → змінні середовища (.env).
        """

        # --- 1. YAML-файл ---
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити %s: %s", yaml_path, e)

        # --- 2. .env змінні ---
        load_dotenv()  # 🔐 Ініціалізує змінні середовища з файлу .env
        env_vars = {
            key: os.getenv(env_name)
            for env_name, key in ENV_OVERRIDES.items()
            if os.getenv(env_name)
        }
        self._deep_update(self._config, self._unflatten_dict(env_vars))
        logger.debug("🔍 Обʼєднаний словник конфігурації: %s", self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'cache.root_dir').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
        """
        value: Any = self._config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def section(self, key: str) -> Dict[str, Any]:
        """📂 Повертає вкладений словник (або порожній): зручно для logging/http."""
        node = self.get(key, {})
        return dict(node) if isinstance(node, dict) else {}

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'cache.root_dir' → {'cache': {'root_dir': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """
        🔁 Рекурсивно обʼєднує два словника (оновлення значень).
        """
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
