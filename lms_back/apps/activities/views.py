import logging

from rest_framework import viewsets
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter

from apps.common.pagination import StandardPagination
from .models import Activity
from .permissions import ActivityPermission, can_see_hidden
from .serializers import ActivitySerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="Activity list",
        parameters=[
            OpenApiParameter(name='kind', description='Filter by kind (video, text, quiz, assignment, ...)', type=str),
        ],
    ),
    retrieve=extend_schema(summary="Activity detail"),
    create=extend_schema(summary="Create activity"),
    update=extend_schema(summary="Update activity"),
    partial_update=extend_schema(summary="Partially update activity"),
    destroy=extend_schema(summary="Delete activity"),
)
class ActivityViewSet(viewsets.ModelViewSet):
    """
    Activity CRUD ViewSet

    Hidden activities are only visible to editors.
    """
    permission_classes = [ActivityPermission]
    serializer_class = ActivitySerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        queryset = Activity.objects.all()

        if not can_see_hidden(self.request.user):
            queryset = queryset.filter(is_hidden=False)

        kind = self.request.query_params.get('kind')
        if kind:
            queryset = queryset.filter(kind=kind.lower())

        return queryset.order_by('order', 'id')

    def perform_create(self, serializer):
        activity = serializer.save()
        logger.info(f"Activity created: id={activity.pk} kind={activity.kind}")

    def perform_update(self, serializer):
        activity = serializer.save()
        logger.info(f"Activity updated: id={activity.pk} kind={activity.kind}")

    def perform_destroy(self, instance):
        logger.info(f"Activity deleted: id={instance.pk} kind={instance.kind}")
        instance.delete()
