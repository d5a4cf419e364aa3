"""
🏗️ Інфраструктура: мережа (`httpx` + ретраї), дисковий кеш та оркестратор.
"""
