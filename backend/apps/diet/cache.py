"""
Кеш карточек продуктов USDA.

Живёт в отдельном алиасе кеша (CACHES['usda']): ограниченный размер,
TTL 7 дней, чтение продлевает срок жизни записи.
"""
from __future__ import annotations

from django.conf import settings
from django.core.cache import caches


class FoodCache:
    def __init__(self, alias: str = 'usda', timeout: int | None = None, key_prefix: str = 'usda:food'):
        self.alias = alias
        self.timeout = timeout if timeout is not None else settings.USDA_CACHE_TTL
        self.key_prefix = key_prefix

    @property
    def backend(self):
        return caches[self.alias]

    def make_key(self, fdc_id: int) -> str:
        return f'{self.key_prefix}:{fdc_id}'

    def get(self, fdc_id: int) -> dict | None:
        key = self.make_key(fdc_id)
        food = self.backend.get(key)
        if food is not None:
            self.backend.touch(key, self.timeout)
        return food

    def get_many(self, fdc_ids: list[int]) -> dict[int, dict]:
        """Возвращает {fdc_id: карточка} только для найденных в кеше."""
        keys = {self.make_key(fdc_id): fdc_id for fdc_id in fdc_ids}
        found = self.backend.get_many(list(keys))
        for key in found:
            self.backend.touch(key, self.timeout)
        return {keys[key]: food for key, food in found.items()}

    def set(self, fdc_id: int, food: dict) -> None:
        self.backend.set(self.make_key(fdc_id), food, self.timeout)

    def set_many(self, foods: dict[int, dict]) -> None:
        self.backend.set_many(
            {self.make_key(fdc_id): food for fdc_id, food in foods.items()},
            self.timeout,
        )

    def clear(self) -> None:
        self.backend.clear()

    def stats(self) -> dict:
        options = settings.CACHES.get(self.alias, {}).get('OPTIONS', {})
        return {
            'alias': self.alias,
            'timeout': self.timeout,
            'max_entries': options.get('MAX_ENTRIES'),
        }
