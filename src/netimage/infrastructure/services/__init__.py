# 🖼️ netimage/infrastructure/services/__init__.py
from .image_loader import NetworkImageLoader

__all__ = ["NetworkImageLoader"]
