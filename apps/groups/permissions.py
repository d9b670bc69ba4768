from rest_framework import permissions


class IsGroupMember(permissions.BasePermission):
    """
    Permission: User must be a member of the group.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Group instance
        return obj.has_member(request.user.id)


class IsGroupAdminOrReadOnly(permissions.BasePermission):
    """
    Permission: Members may read, only group admins may write.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Group instance
        if request.method in permissions.SAFE_METHODS:
            return obj.has_member(request.user.id)
        return obj.is_admin(request.user.id)
