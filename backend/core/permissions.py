from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsOwnerOrReadOnly(BasePermission):
    """
    Чтение — всем, изменение — только автору объекта (поле created_by).

    Объекты без автора (системный каталог) может менять только staff.
    """

    message = 'Изменять можно только свои объекты'

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        if request.user.is_staff:
            return True
        return obj.created_by_id is not None and obj.created_by_id == request.user.id
