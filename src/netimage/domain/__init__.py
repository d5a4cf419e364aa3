"""
🏛️ Доменний шар: чисті сутності та контракти, без HTTP і файлової системи.
"""
