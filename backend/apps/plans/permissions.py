from rest_framework.permissions import SAFE_METHODS, BasePermission

from .services import has_access


class PlanPermission(BasePermission):
    """
    Чтение и подписка — при наличии доступа к плану,
    изменение и удаление — только автору.
    """

    message = 'Нет доступа к плану'
    access_actions = ('subscribe', 'unsubscribe')

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS or view.action in self.access_actions:
            return has_access(obj, request.user)
        return obj.created_by_id is not None and obj.created_by_id == request.user.id
