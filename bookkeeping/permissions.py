from rest_framework import permissions


class IsOwner(permissions.BasePermission):
    """
    Custom permission to only allow owners of an object to access it.
    Ensures users can only access their own data.
    """

    def has_object_permission(self, request, view, obj):
        """
        Check if the object belongs to the requesting user
        """
        if hasattr(obj, 'user'):
            return obj.user == request.user

        return False
