from django.contrib import admin
from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "kind", "is_hidden", "order", "created_at")
    list_filter = ("kind", "is_hidden")
    search_fields = ("title",)
