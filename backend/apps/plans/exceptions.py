from core.exceptions import ForbiddenError, NotFoundError, ServiceError


class PlanNotFound(NotFoundError):
    default_message = 'План не найден'


class PlanForbidden(ForbiddenError):
    default_message = 'Нет доступа к плану'


class SubscriptionNotFound(NotFoundError):
    default_message = 'Подписка не найдена'


class SubscriptionForbidden(ForbiddenError):
    default_message = 'Подписка принадлежит другому пользователю'


class AlreadySubscribed(ServiceError):
    default_message = 'Уже есть активная подписка на этот план'
