from core.exceptions import ExternalServiceError, NotFoundError


class NutritionProviderError(ExternalServiceError):
    default_message = 'Сервис USDA FoodData Central недоступен'


class FoodNotFound(NotFoundError):
    default_message = 'Продукт не найден в USDA FoodData Central'


class GoalNotFound(NotFoundError):
    default_message = 'Активная цель не задана'
