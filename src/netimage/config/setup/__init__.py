# 📦 netimage/config/setup/__init__.py
"""
📦 Складання залежностей: `Container` та `build_image_loader`.
"""

from .container import Container, build_image_loader

__all__ = ["Container", "build_image_loader"]
