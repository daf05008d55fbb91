from rest_framework.permissions import BasePermission


def is_editor(user, permission_code):
    """Staff, or a user holding the given Django model permission"""
    if not user or not user.is_authenticated:
        return False
    return user.is_staff or user.has_perm(permission_code)


class EditorPermission(BasePermission):
    """
    Read actions are open (or open to authenticated users when
    READ_REQUIRES_AUTH), everything else needs is_editor().
    """
    READ_ACTIONS = ['list', 'retrieve']
    READ_REQUIRES_AUTH = True
    EDIT_PERMISSION = None

    def has_permission(self, request, view):
        if view.action in self.READ_ACTIONS:
            if not self.READ_REQUIRES_AUTH:
                return True
            return bool(request.user and request.user.is_authenticated)

        return is_editor(request.user, self.EDIT_PERMISSION)
