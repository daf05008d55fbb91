import logging

from django.db import transaction
from django.utils import timezone

from utils.exceptions import ResourceNotFoundException, ValidationException
from .models import MenuItem
from .utils import build_menu_tree, flatten_menu_tree, would_create_cycle

logger = logging.getLogger(__name__)


CIRCULAR_PARENT_CODE = 'ERR_102'
MENU_NOT_FOUND_CODE = 'ERR_202'


def get_menu_items():
    """All menu items, flat, sorted by order (id breaks ties)"""
    return MenuItem.objects.all().order_by("order", "id")


def get_menu_item(pk):
    try:
        return MenuItem.objects.get(pk=pk)
    except (MenuItem.DoesNotExist, ValueError, TypeError):
        raise ResourceNotFoundException(
            code=MENU_NOT_FOUND_CODE,
            message='Menu item not found.',
            detail={'id': pk},
        )


def get_menu_tree():
    # rebuilt from the flat rows on every read, never cached
    return build_menu_tree(list(get_menu_items()))


def get_flat_menu():
    return flatten_menu_tree(get_menu_tree())


def has_children(menu_item):
    return MenuItem.objects.filter(parent_id=menu_item.pk).exists()


def create_menu_item(data):
    menu_item = MenuItem.objects.create(**data)
    logger.info(f"Menu item created: id={menu_item.pk} name={menu_item.name!r} parent={menu_item.parent_id}")
    return menu_item


def update_menu_item(menu_item, data):
    """
    Apply ``data`` to ``menu_item``.

    A parent change is checked against a snapshot of all items first; a move
    that would put the item under itself or one of its descendants is
    rejected before anything is written.
    """
    if 'parent' in data:
        new_parent = data['parent']
        new_parent_id = new_parent.pk if new_parent is not None else None
        if new_parent_id != menu_item.parent_id:
            snapshot = list(MenuItem.objects.only("id", "parent"))
            if would_create_cycle(new_parent_id, menu_item.pk, snapshot):
                raise ValidationException(
                    code=CIRCULAR_PARENT_CODE,
                    message='Cannot create circular dependency. An item cannot be its own ancestor.',
                    field='parent',
                    detail={'id': menu_item.pk, 'parent': new_parent_id},
                )

    for field, value in data.items():
        setattr(menu_item, field, value)
    menu_item.save()

    logger.info(f"Menu item updated: id={menu_item.pk} fields={sorted(data)}")
    return menu_item


@transaction.atomic
def delete_menu_item(menu_item):
    """
    Delete ``menu_item``; its direct children move up to its former parent
    (top level when it was a root). Returns the number of moved children.
    """
    moved = MenuItem.objects.filter(parent_id=menu_item.pk).update(parent_id=menu_item.parent_id)
    pk = menu_item.pk
    menu_item.delete()

    logger.info(f"Menu item deleted: id={pk} children_moved={moved} new_parent={menu_item.parent_id}")
    return moved


@transaction.atomic
def reorder_menu_items(updates):
    """
    Bulk ``order`` overwrite from ``[{"id": .., "order": ..}, ...]``.

    All-or-nothing: if any id is unknown nothing is written. A repeated id
    keeps its last order. Items not listed are left alone.
    """
    new_orders = {}
    for update in updates:
        new_orders[update["id"]] = update["order"]

    menu_items = list(MenuItem.objects.select_for_update().filter(pk__in=new_orders.keys()))
    found_ids = {menu_item.pk for menu_item in menu_items}
    missing_ids = sorted(pk for pk in new_orders if pk not in found_ids)
    if missing_ids:
        raise ResourceNotFoundException(
            code=MENU_NOT_FOUND_CODE,
            message='Menu item not found.',
            detail={'ids': missing_ids},
        )

    now = timezone.now()
    for menu_item in menu_items:
        menu_item.order = new_orders[menu_item.pk]
        menu_item.updated_at = now
    MenuItem.objects.bulk_update(menu_items, ["order", "updated_at"])

    logger.info(f"Menu items reordered: {len(menu_items)} item(s)")
    return sorted(menu_items, key=lambda menu_item: (menu_item.order, menu_item.pk))
