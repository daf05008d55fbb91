from rest_framework import serializers

from utils.validators import validate_required_text
from .configs import ActivityConfigError, dump_activity_config, parse_activity_config
from .models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    variant = serializers.CharField(read_only=True)
    config = serializers.JSONField(required=False, default=dict)

    class Meta:
        model = Activity
        fields = [
            'id', 'kind', 'variant', 'title', 'description',
            'is_hidden', 'order', 'config',
            'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'variant', 'created_by', 'created_at', 'updated_at']

    def validate_kind(self, value):
        return validate_required_text(value, 'Activity kind').lower()

    def validate_title(self, value):
        return validate_required_text(value, 'Activity title')

    def validate(self, attrs):
        # kind change re-validates the stored config against the new schema
        if 'kind' in attrs or 'config' in attrs:
            kind = attrs.get('kind', getattr(self.instance, 'kind', None))
            raw = attrs.get('config', getattr(self.instance, 'config', {}))
            try:
                config = parse_activity_config(kind, raw)
            except ActivityConfigError as exc:
                raise serializers.ValidationError({'config': exc.messages})
            attrs['config'] = dump_activity_config(config)
        return attrs

    def create(self, validated_data):
        request = self.context.get('request')
        user = request.user if request and request.user.is_authenticated else None
        return Activity.objects.create(created_by=user, **validated_data)
