from io import StringIO

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from .models import MenuItem
from . import services
from .utils import Placement, build_menu_tree, flatten_menu_tree, would_create_cycle


def make_item(pk, name, parent=None, order=0):
    """Unsaved MenuItem; the tree helpers never touch the database"""
    return MenuItem(id=pk, name=name, url="", icon="", parent_id=parent, order=order)


def ids(nodes):
    return [node["id"] for node in nodes]


class BuildMenuTreeTest(SimpleTestCase):
    """build_menu_tree tests"""

    def test_concrete_scenario(self):
        items = [
            make_item(1, "Home", order=0),
            make_item(2, "Courses", order=1),
            make_item(3, "All Courses", parent=2, order=0),
            make_item(4, "My Courses", parent=2, order=1),
        ]

        tree = build_menu_tree(items)

        self.assertEqual([node["name"] for node in tree], ["Home", "Courses"])
        self.assertEqual([node["name"] for node in tree[1]["children"]], ["All Courses", "My Courses"])
        self.assertEqual(tree[0]["children"], [])

    def test_input_order_does_not_matter(self):
        items = [
            make_item(4, "My Courses", parent=2, order=1),
            make_item(3, "All Courses", parent=2, order=0),
            make_item(2, "Courses", order=1),
            make_item(1, "Home", order=0),
        ]

        tree = build_menu_tree(items)

        self.assertEqual(ids(tree), [1, 2])
        self.assertEqual(ids(tree[1]["children"]), [3, 4])

    def test_every_item_appears_once(self):
        items = [
            make_item(1, "A"),
            make_item(2, "B", parent=1),
            make_item(3, "C", parent=2),
            make_item(4, "D", parent=2, order=-1),
            make_item(5, "E", parent=404),
            make_item(6, "F"),
            make_item(7, "G", parent=6),
        ]

        flat = flatten_menu_tree(build_menu_tree(items))

        self.assertEqual(len(flat), len(items))
        self.assertEqual(sorted(entry["id"] for entry in flat), [1, 2, 3, 4, 5, 6, 7])

    def test_dangling_parent_is_promoted_and_tagged(self):
        items = [
            make_item(1, "Home", order=0),
            make_item(2, "Lost", parent=999, order=1),
        ]

        tree = build_menu_tree(items)

        self.assertEqual(ids(tree), [1, 2])
        self.assertEqual(tree[0]["placement"], Placement.ROOT.value)
        self.assertEqual(tree[1]["placement"], Placement.ORPHANED.value)
        self.assertEqual(tree[1]["parentId"], 999)

    def test_attached_nodes_are_tagged(self):
        tree = build_menu_tree([make_item(1, "Root"), make_item(2, "Child", parent=1)])

        self.assertEqual(tree[0]["children"][0]["placement"], Placement.ATTACHED.value)

    def test_equal_order_keeps_input_order(self):
        items = [
            make_item(5, "e"),
            make_item(3, "c"),
            make_item(4, "d"),
            make_item(9, "child-b", parent=3, order=2),
            make_item(8, "child-a", parent=3, order=2),
            make_item(7, "child-first", parent=3, order=1),
        ]

        tree = build_menu_tree(items)

        self.assertEqual(ids(tree), [5, 3, 4])
        self.assertEqual(ids(tree[1]["children"]), [7, 9, 8])

    def test_missing_order_counts_as_zero(self):
        items = [make_item(1, "later", order=1), make_item(2, "none", order=None)]

        tree = build_menu_tree(items)

        self.assertEqual(ids(tree), [2, 1])

    def test_stored_cycle_is_broken_without_losing_nodes(self):
        items = [
            make_item(1, "A", parent=2),
            make_item(2, "B", parent=1),
            make_item(3, "C", parent=1),
            make_item(4, "Home"),
        ]

        tree = build_menu_tree(items)
        flat = flatten_menu_tree(tree)

        self.assertEqual(sorted(entry["id"] for entry in flat), [1, 2, 3, 4])
        detached = [node for node in tree if node["placement"] == Placement.DETACHED.value]
        self.assertEqual(ids(detached), [1])
        self.assertEqual(ids(detached[0]["children"]), [2, 3])

    def test_self_parent_in_stored_data(self):
        tree = build_menu_tree([make_item(1, "Loop", parent=1)])

        self.assertEqual(ids(tree), [1])
        self.assertEqual(tree[0]["placement"], Placement.DETACHED.value)
        self.assertEqual(tree[0]["children"], [])

    def test_subtree_below_a_cycle_stays_attached(self):
        items = [
            make_item(3, "C", parent=1),
            make_item(1, "A", parent=2),
            make_item(2, "B", parent=1),
        ]

        tree = build_menu_tree(items)

        self.assertEqual(len(tree), 1)
        self.assertEqual(tree[0]["placement"], Placement.DETACHED.value)
        self.assertEqual(len(flatten_menu_tree(tree)), 3)

    def test_empty_input(self):
        self.assertEqual(build_menu_tree([]), [])


class WouldCreateCycleTest(SimpleTestCase):

    def setUp(self):
        # A -> B -> C, plus an unrelated root D
        self.items = [
            make_item(1, "A"),
            make_item(2, "B", parent=1),
            make_item(3, "C", parent=2),
            make_item(4, "D"),
        ]

    def test_self_parent(self):
        for item in self.items:
            self.assertTrue(would_create_cycle(item.id, item.id, self.items))

    def test_move_to_top_level(self):
        for item in self.items:
            self.assertFalse(would_create_cycle(None, item.id, self.items))

    def test_descendant_as_new_parent(self):
        self.assertTrue(would_create_cycle(3, 1, self.items))
        self.assertTrue(would_create_cycle(2, 1, self.items))

    def test_unrelated_new_parent(self):
        self.assertFalse(would_create_cycle(4, 1, self.items))

    def test_moving_down_is_not_a_cycle(self):
        self.assertFalse(would_create_cycle(1, 3, self.items))

    def test_terminates_on_cyclic_data(self):
        items = [make_item(1, "A", parent=2), make_item(2, "B", parent=1), make_item(3, "C")]

        self.assertFalse(would_create_cycle(3, 1, items))
        self.assertTrue(would_create_cycle(2, 1, items))


class FlattenMenuTreeTest(SimpleTestCase):

    def test_path_order_comes_from_position(self):
        items = [
            make_item(1, "Home", order=10),
            make_item(2, "Courses", order=20),
            make_item(3, "All Courses", parent=2, order=5),
            make_item(4, "My Courses", parent=2, order=7),
        ]

        flat = flatten_menu_tree(build_menu_tree(items))

        self.assertEqual([entry["pathOrder"] for entry in flat], ["0", "1", "1.0", "1.1"])
        self.assertEqual([entry["depth"] for entry in flat], [0, 0, 1, 1])
        self.assertEqual([entry["order"] for entry in flat], [10, 20, 5, 7])
        for entry in flat:
            self.assertNotIn("children", entry)

    def test_pre_order(self):
        items = [
            make_item(1, "A", order=0),
            make_item(2, "A.1", parent=1, order=0),
            make_item(3, "A.1.1", parent=2, order=0),
            make_item(4, "B", order=1),
        ]

        flat = flatten_menu_tree(build_menu_tree(items))

        self.assertEqual([entry["name"] for entry in flat], ["A", "A.1", "A.1.1", "B"])
        self.assertEqual(flat[2]["pathOrder"], "0.0.0")


class MenuServiceTest(TestCase):

    def setUp(self):
        self.home = MenuItem.objects.create(name="Home", order=0)
        self.courses = MenuItem.objects.create(name="Courses", order=1)
        self.all_courses = MenuItem.objects.create(name="All Courses", parent=self.courses, order=0)
        self.my_courses = MenuItem.objects.create(name="My Courses", parent=self.courses, order=1)

    def test_reorder_is_idempotent(self):
        batch = [
            {"id": self.home.pk, "order": 5},
            {"id": self.courses.pk, "order": 2},
        ]

        services.reorder_menu_items(batch)
        first = dict(MenuItem.objects.values_list("id", "order"))
        services.reorder_menu_items(batch)
        second = dict(MenuItem.objects.values_list("id", "order"))

        self.assertEqual(first, second)
        self.assertEqual(second[self.home.pk], 5)
        self.assertEqual(second[self.all_courses.pk], 0)

    def test_reorder_last_duplicate_wins(self):
        services.reorder_menu_items([
            {"id": self.home.pk, "order": 1},
            {"id": self.home.pk, "order": 9},
        ])

        self.home.refresh_from_db()
        self.assertEqual(self.home.order, 9)

    def test_delete_moves_children_to_former_parent(self):
        nested = MenuItem.objects.create(name="Nested", parent=self.all_courses)

        moved = services.delete_menu_item(self.all_courses)

        nested.refresh_from_db()
        self.assertEqual(moved, 1)
        self.assertEqual(nested.parent_id, self.courses.pk)

    def test_delete_root_promotes_children(self):
        services.delete_menu_item(self.courses)

        tree = services.get_menu_tree()

        self.assertEqual([node["name"] for node in tree], ["Home", "All Courses", "My Courses"])
        self.assertTrue(all(node["placement"] == Placement.ROOT.value for node in tree))

    def test_has_children(self):
        self.assertTrue(services.has_children(self.courses))
        self.assertFalse(services.has_children(self.home))

    def test_tree_reflects_dangling_rows(self):
        MenuItem.objects.create(name="Legacy", parent_id=987654, order=3)

        tree = services.get_menu_tree()

        self.assertEqual(tree[-1]["name"], "Legacy")
        self.assertEqual(tree[-1]["placement"], Placement.ORPHANED.value)


class MenuAPITest(APITestCase):
    """Menu API tests"""

    def setUp(self):
        User = get_user_model()
        self.admin = User.objects.create_user(username="admin1", password="testpass123", is_staff=True)
        self.student = User.objects.create_user(username="student1", password="testpass123")

        self.home = MenuItem.objects.create(name="Home", url="/", order=0)
        self.courses = MenuItem.objects.create(name="Courses", url="/courses", order=1)
        self.all_courses = MenuItem.objects.create(name="All Courses", parent=self.courses, order=0)
        self.my_courses = MenuItem.objects.create(name="My Courses", parent=self.courses, order=1)

        self.client = APIClient()

    def test_tree_is_public(self):
        response = self.client.get('/api/menu/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([node['name'] for node in response.data], ['Home', 'Courses'])
        self.assertEqual(
            [node['name'] for node in response.data[1]['children']],
            ['All Courses', 'My Courses'],
        )

    def test_flat_is_public(self):
        response = self.client.get('/api/menu/flat/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry['pathOrder'] for entry in response.data], ['0', '1', '1.0', '1.1'])

    def test_retrieve(self):
        response = self.client.get(f'/api/menu/{self.all_courses.pk}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['parent'], self.courses.pk)

    def test_retrieve_unknown_id(self):
        response = self.client.get('/api/menu/999999/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'ERR_202')

    def test_create_unauthenticated(self):
        response = self.client.post('/api/menu/', {'name': 'Blog'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(MenuItem.objects.count(), 4)

    def test_create_without_edit_permission(self):
        self.client.force_authenticate(user=self.student)

        response = self.client.post('/api/menu/', {'name': 'Blog'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_with_model_permission(self):
        perm = Permission.objects.get(codename='change_menuitem', content_type__app_label='menus')
        self.student.user_permissions.add(perm)
        student = get_user_model().objects.get(pk=self.student.pk)
        self.client.force_authenticate(user=student)

        response = self.client.post('/api/menu/', {'name': 'Blog', 'url': '/blog'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_create_by_admin(self):
        self.client.force_authenticate(user=self.admin)
        data = {'name': '  Certificates  ', 'url': '/certificates', 'icon': '🎓', 'parent': self.courses.pk, 'order': 2}

        response = self.client.post('/api/menu/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Certificates')
        self.assertEqual(response.data['parent'], self.courses.pk)
        created = MenuItem.objects.get(pk=response.data['id'])
        self.assertEqual(created.order, 2)

    def test_create_defaults(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post('/api/menu/', {'name': 'Blog'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['url'], '')
        self.assertEqual(response.data['order'], 0)
        self.assertIsNone(response.data['parent'])

    def test_create_blank_name(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post('/api/menu/', {'name': '   '}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'ERR_101')
        self.assertEqual(response.data['error']['field'], 'name')

    def test_create_invalid_url(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post('/api/menu/', {'name': 'Bad', 'url': 'not a url'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['field'], 'url')

    def test_create_unknown_parent(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post('/api/menu/', {'name': 'Child', 'parent': 999999}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['field'], 'parent')

    def test_update_rejects_descendant_parent(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(
            f'/api/menu/{self.courses.pk}/', {'parent': self.all_courses.pk}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'ERR_102')
        self.courses.refresh_from_db()
        self.assertIsNone(self.courses.parent_id)

    def test_update_rejects_self_parent(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(
            f'/api/menu/{self.home.pk}/', {'parent': self.home.pk}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'ERR_102')

    def test_update_moves_item(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.put(
            f'/api/menu/{self.my_courses.pk}/',
            {'name': 'My Courses', 'url': '/my-courses', 'parent': self.home.pk, 'order': 0},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.my_courses.refresh_from_db()
        self.assertEqual(self.my_courses.parent_id, self.home.pk)
        self.assertEqual(self.my_courses.url, '/my-courses')

    def test_full_update_without_parent_moves_to_top_level(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.put(
            f'/api/menu/{self.all_courses.pk}/', {'name': 'All Courses'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.all_courses.refresh_from_db()
        self.assertIsNone(self.all_courses.parent_id)

    def test_partial_update_keeps_parent(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(
            f'/api/menu/{self.all_courses.pk}/', {'name': 'Catalogue'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.all_courses.refresh_from_db()
        self.assertEqual(self.all_courses.name, 'Catalogue')
        self.assertEqual(self.all_courses.parent_id, self.courses.pk)

    def test_delete_moves_children_up(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(f'/api/menu/{self.courses.pk}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['children_moved'], 2)
        self.assertFalse(MenuItem.objects.filter(pk=self.courses.pk).exists())
        self.all_courses.refresh_from_db()
        self.assertIsNone(self.all_courses.parent_id)

    def test_delete_unknown_id(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete('/api/menu/999999/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_reorder(self):
        self.client.force_authenticate(user=self.admin)
        data = {'items': [
            {'id': self.home.pk, 'order': 1},
            {'id': self.courses.pk, 'order': 0},
        ]}

        response = self.client.post('/api/menu/reorder/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['name'] for item in response.data], ['Courses', 'Home'])
        tree = self.client.get('/api/menu/').data
        self.assertEqual([node['name'] for node in tree], ['Courses', 'Home'])

    def test_reorder_unknown_id_writes_nothing(self):
        self.client.force_authenticate(user=self.admin)
        data = {'items': [
            {'id': self.home.pk, 'order': 7},
            {'id': 999999, 'order': 0},
        ]}

        response = self.client.post('/api/menu/reorder/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['detail'], {'ids': [999999]})
        self.home.refresh_from_db()
        self.assertEqual(self.home.order, 0)

    def test_reorder_requires_items(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post('/api/menu/reorder/', {'items': []}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reorder_requires_integer_order(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            '/api/menu/reorder/', {'items': [{'id': self.home.pk, 'order': 'first'}]}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['field'], 'items')

    def test_reorder_forbidden_for_students(self):
        self.client.force_authenticate(user=self.student)

        response = self.client.post(
            '/api/menu/reorder/', {'items': [{'id': self.home.pk, 'order': 3}]}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class SeedMenuCommandTest(TestCase):

    def test_seed_is_idempotent(self):
        call_command('seed_menu', stdout=StringIO())
        count = MenuItem.objects.count()
        call_command('seed_menu', stdout=StringIO())

        self.assertGreater(count, 0)
        self.assertEqual(MenuItem.objects.count(), count)

    def test_seeded_tree(self):
        call_command('seed_menu', stdout=StringIO())

        tree = services.get_menu_tree()

        self.assertEqual(tree[0]['name'], 'Home')
        admin_panel = next(node for node in tree if node['name'] == 'Admin Panel')
        self.assertIn('Course Management', [child['name'] for child in admin_panel['children']])

    def test_clear(self):
        MenuItem.objects.create(name='Stale')

        call_command('seed_menu', '--clear', stdout=StringIO())

        self.assertFalse(MenuItem.objects.filter(name='Stale').exists())
