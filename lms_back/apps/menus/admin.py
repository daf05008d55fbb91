from django.contrib import admin
from .models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "url", "icon", "parent_id", "order")
    list_editable = ("order",)
    search_fields = ("name", "url")
    ordering = ("parent_id", "order", "id")
