from apps.common.permission import EditorPermission


class MenuPermission(EditorPermission):
    """
    Menu API access

    - anyone (including anonymous): tree, flat list, single item
    - staff or 'menus.change_menuitem': create, update, delete, reorder
    """
    READ_ACTIONS = ['list', 'flat', 'retrieve']
    READ_REQUIRES_AUTH = False
    EDIT_PERMISSION = 'menus.change_menuitem'
