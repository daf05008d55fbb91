from collections import defaultdict, deque
from enum import Enum


class Placement(str, Enum):
    """Where build_menu_tree put a node, and why"""
    ROOT = "root"            # no parent reference
    ATTACHED = "attached"    # nested under its parent
    ORPHANED = "orphaned"    # parent id points at nothing, promoted to root
    DETACHED = "detached"    # stored parents form a cycle, broken here and promoted to root


def _sort_key(node):
    return node["order"] or 0


def menu_node(item):
    return {
        "id": item.id,
        "name": item.name,
        "url": item.url,
        "icon": item.icon,
        "parentId": item.parent_id,
        "order": item.order,
        "placement": Placement.ROOT.value,
        "children": [],
    }


def _walk(roots):
    """Pre-order iteration over a forest of nodes"""
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node["children"]))


def build_menu_tree(menus):
    """
    Flat menu items -> forest of nested nodes.

    Every item shows up exactly once. Roots and every children list are
    sorted by ``order`` with ties kept in input order. Items whose parent is
    missing are promoted to root and tagged ``orphaned``; items that stored
    data has locked into a parent cycle are promoted and tagged ``detached``.
    """
    menu_map = {}
    nodes = []
    tree = []

    # one node per item
    for menu in menus:
        node = menu_node(menu)
        menu_map[menu.id] = node
        nodes.append(node)

    # parent-child linking, single pass
    for node in nodes:
        parent_id = node["parentId"]
        if parent_id is None:
            tree.append(node)
        elif parent_id in menu_map:
            node["placement"] = Placement.ATTACHED.value
            menu_map[parent_id]["children"].append(node)
        else:
            node["placement"] = Placement.ORPHANED.value
            tree.append(node)

    # nodes not reachable from a root sit on, or below, a parent cycle
    reached = {id(node) for node in _walk(tree)}
    for node in nodes:
        if id(node) in reached:
            continue
        # climb until a node repeats; that node is on the cycle
        cycle_node = node
        seen = set()
        while id(cycle_node) not in seen:
            seen.add(id(cycle_node))
            cycle_node = menu_map[cycle_node["parentId"]]

        parent = menu_map[cycle_node["parentId"]]
        parent["children"] = [child for child in parent["children"] if child is not cycle_node]
        cycle_node["placement"] = Placement.DETACHED.value
        tree.append(cycle_node)
        reached.update(id(n) for n in _walk([cycle_node]))

    tree.sort(key=_sort_key)
    for node in nodes:
        node["children"].sort(key=_sort_key)

    return tree


def would_create_cycle(new_parent_id, moving_id, menus):
    """
    True when moving ``moving_id`` under ``new_parent_id`` would make the
    item its own ancestor, i.e. the new parent is the item itself or one of
    its descendants. Moving to the top level (None) never cycles.
    """
    if new_parent_id is None:
        return False
    if new_parent_id == moving_id:
        return True

    children_index = defaultdict(list)
    for menu in menus:
        if menu.parent_id is not None:
            children_index[menu.parent_id].append(menu.id)

    # BFS down the moving item's subtree; visited guards against cyclic data
    visited = {moving_id}
    queue = deque([moving_id])
    while queue:
        current_id = queue.popleft()
        for child_id in children_index.get(current_id, ()):
            if child_id == new_parent_id:
                return True
            if child_id not in visited:
                visited.add(child_id)
                queue.append(child_id)

    return False


def flatten_menu_tree(tree, parent_path=()):
    """
    Depth-first pre-order listing of a built tree.

    ``pathOrder`` is the dotted positional path ("0", "0.1", ...), taken from
    the position at each level rather than the stored ``order``.
    """
    flattened = []

    for index, node in enumerate(tree):
        path = parent_path + (index,)
        entry = {key: value for key, value in node.items() if key != "children"}
        entry["pathOrder"] = ".".join(str(part) for part in path)
        entry["depth"] = len(path) - 1
        flattened.append(entry)

        if node.get("children"):
            flattened.extend(flatten_menu_tree(node["children"], path))

    return flattened
