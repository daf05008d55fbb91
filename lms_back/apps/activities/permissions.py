from apps.common.permission import EditorPermission, is_editor


class ActivityPermission(EditorPermission):
    """Authenticated users read; staff or 'activities.change_activity' write"""
    EDIT_PERMISSION = 'activities.change_activity'


def can_see_hidden(user):
    return is_editor(user, ActivityPermission.EDIT_PERMISSION)
