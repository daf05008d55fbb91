from rest_framework import serializers

from utils.validators import validate_icon, validate_navigation_url, validate_required_text
from .models import MenuItem


class MenuItemSerializer(serializers.ModelSerializer):
    """Single menu item (create / update / retrieve)"""
    parent = serializers.PrimaryKeyRelatedField(
        queryset=MenuItem.objects.all(), allow_null=True, required=False, default=None
    )
    url = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    icon = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    order = serializers.IntegerField(required=False, default=0)

    class Meta:
        model = MenuItem
        fields = [
            "id",
            "name",
            "url",
            "icon",
            "parent",
            "order",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        return validate_required_text(value, "Menu item name")

    def validate_url(self, value):
        return validate_navigation_url(value)

    def validate_icon(self, value):
        return validate_icon(value)


class MenuReorderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    order = serializers.IntegerField()


class MenuReorderSerializer(serializers.Serializer):
    """{"items": [{"id": 3, "order": 0}, ...]}"""
    items = MenuReorderItemSerializer(many=True, allow_empty=False)
