from django.core.management.base import BaseCommand
from django.db import transaction

from apps.menus.models import MenuItem


# Default LMS navigation: (name, url, icon, order, children)
DEFAULT_MENU = [
    ("Home", "/", "🏠", 0, []),
    ("Courses", "/courses", "📚", 1, [
        ("All Courses", "/courses", "📚", 0, []),
        ("Public Courses", "/public-courses", "🌍", 1, []),
        ("Categories", "/categories", "📁", 2, []),
    ]),
    ("About Us", "/about", "ℹ️", 4, []),
    ("Contact", "/contact", "📧", 5, []),
    ("Dashboard", "/dashboard", "📊", 10, [
        ("My Courses", "/my-courses", "📖", 0, []),
        ("Enrolled Courses", "/user-enrolled-courses", "🎯", 1, []),
        ("Assignments", "/assignments", "📝", 2, []),
        ("Certificates", "/certificates", "🎓", 3, []),
        ("Profile", "/profile", "👤", 4, []),
    ]),
    ("Admin Panel", "/admin", "⚙️", 20, [
        ("Users", "/admin/users", "👥", 0, []),
        ("Roles & Permissions", "/admin/roles", "🔐", 1, []),
        ("Course Management", "/admin/courses", "🗂️", 2, [
            ("Create Course", "/admin/courses/create", "➕", 0, []),
            ("Sections", "/admin/sections", "📑", 1, []),
        ]),
        ("Enrollments", "/admin/enrollments", "🧾", 3, []),
        ("Payments", "/admin/payments", "💳", 4, []),
        ("Menu Manager", "/admin/menu", "🧭", 5, []),
    ]),
]


class Command(BaseCommand):
    help = 'Register the default LMS navigation menu'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete every existing menu item before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("=" * 60)
        self.stdout.write("Menu Registration")
        self.stdout.write("=" * 60)

        if options['clear']:
            deleted, _ = MenuItem.objects.all().delete()
            self.stdout.write(f"  Cleared {deleted} existing menu item(s)")

        counts = {'created': 0, 'exists': 0}
        self._register(DEFAULT_MENU, None, 0, counts)

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(self.style.SUCCESS(
            f"Menu seeded: {counts['created']} created, {counts['exists']} already present"
        ))
        self.stdout.write("=" * 60)

    def _register(self, entries, parent, depth, counts):
        for name, url, icon, order, children in entries:
            menu_item, created = MenuItem.objects.get_or_create(
                name=name,
                parent=parent,
                defaults={'url': url, 'icon': icon, 'order': order},
            )
            counts['created' if created else 'exists'] += 1
            self.stdout.write(f"  {'  ' * depth}{'Created' if created else 'Exists'}: {menu_item.name}")
            self._register(children, menu_item, depth + 1, counts)
