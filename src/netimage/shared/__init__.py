"""
🧰 Спільні модулі: утиліти логування/незмінних структур та метрики.
"""
