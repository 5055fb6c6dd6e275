"""
Клиент USDA FoodData Central API.

Документация: https://fdc.nal.usda.gov/api-guide.html
Ключ передаётся query-параметром api_key.
"""
from __future__ import annotations

import logging

import httpx
from django.conf import settings

from .exceptions import FoodNotFound, NutritionProviderError

logger = logging.getLogger(__name__)

DATA_TYPES = ['Foundation', 'SR Legacy', 'Survey (FNDDS)', 'Branded']
SORT_FIELDS = ['dataType.keyword', 'lowercaseDescription.keyword', 'fdcId', 'publishedDate']


class UsdaClient:
    """Тонкая обёртка над HTTP API. Ошибки сети и не-200 ответы -> NutritionProviderError."""

    def __init__(self, api_key: str, base_url: str, timeout: int = 10):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> UsdaClient:
        if not settings.USDA_API_KEY:
            logger.warning('USDA_API_KEY not configured')
        return cls(
            api_key=settings.USDA_API_KEY,
            base_url=settings.USDA_API_BASE_URL,
            timeout=settings.USDA_TIMEOUT,
        )

    def _handle_response(self, resp: httpx.Response, path: str):
        if resp.status_code == 404:
            raise FoodNotFound()
        if resp.status_code != 200:
            logger.error('USDA error %s for %s: %s', resp.status_code, path, resp.text[:500])
            raise NutritionProviderError(f'USDA вернул ошибку {resp.status_code}')
        return resp.json()

    def _get(self, path: str, params: dict | None = None):
        try:
            resp = httpx.get(
                f'{self.base_url}{path}',
                params={**(params or {}), 'api_key': self.api_key},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.exception('USDA request failed for %s: %s', path, e)
            raise NutritionProviderError() from e
        return self._handle_response(resp, path)

    def _post(self, path: str, payload: dict):
        try:
            resp = httpx.post(
                f'{self.base_url}{path}',
                params={'api_key': self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.exception('USDA request failed for %s: %s', path, e)
            raise NutritionProviderError() from e
        return self._handle_response(resp, path)

    def search_foods(
        self,
        query: str,
        data_types: list[str] | None = None,
        page_size: int = 25,
        page_number: int = 1,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> dict:
        """
        Поиск продуктов.

        Args:
            query: Строка поиска
            data_types: Фильтр по типам данных (Foundation, Branded, ...)
            page_size: Размер страницы (до 200)
            page_number: Номер страницы, начиная с 1
            sort_by: Поле сортировки
            sort_order: asc / desc

        Returns:
            Ответ USDA: totalHits, currentPage, totalPages, foods
        """
        params = {
            'query': query,
            'pageSize': page_size,
            'pageNumber': page_number,
        }
        if data_types:
            params['dataType'] = data_types
        if sort_by:
            params['sortBy'] = sort_by
        if sort_order:
            params['sortOrder'] = sort_order

        return self._get('/foods/search', params)

    def get_food(self, fdc_id: int) -> dict:
        """Полная карточка продукта по FDC ID."""
        return self._get(f'/food/{fdc_id}')

    def get_foods(self, fdc_ids: list[int]) -> list[dict]:
        """Несколько карточек одним запросом."""
        if not fdc_ids:
            return []
        return self._post('/foods', {'fdcIds': list(fdc_ids)})
