from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiResponse

from . import services
from .permissions import MenuPermission
from .serializers import MenuItemSerializer, MenuReorderSerializer


@extend_schema_view(
    list=extend_schema(
        summary="Menu tree",
        description="All menu items as a nested forest, sorted by order at every level.",
    ),
    retrieve=extend_schema(summary="Menu item detail"),
    create=extend_schema(summary="Create menu item"),
    update=extend_schema(summary="Update menu item"),
    partial_update=extend_schema(summary="Partially update menu item"),
    destroy=extend_schema(
        summary="Delete menu item",
        description="Children of the deleted item move to its former parent.",
    ),
)
class MenuItemViewSet(viewsets.ModelViewSet):
    """
    Navigation menu CRUD ViewSet

    The tree is rebuilt from the flat rows on every read.
    """
    permission_classes = [MenuPermission]
    serializer_class = MenuItemSerializer

    def get_queryset(self):
        return services.get_menu_items()

    def get_object(self):
        menu_item = services.get_menu_item(self.kwargs[self.lookup_field])
        self.check_object_permissions(self.request, menu_item)
        return menu_item

    def list(self, request, *args, **kwargs):
        return Response(services.get_menu_tree())

    def perform_create(self, serializer):
        serializer.instance = services.create_menu_item(serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = services.update_menu_item(serializer.instance, serializer.validated_data)

    def destroy(self, request, *args, **kwargs):
        menu_item = self.get_object()
        data = MenuItemSerializer(menu_item).data
        moved = services.delete_menu_item(menu_item)
        return Response({"deleted": data, "children_moved": moved}, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Flat menu",
        description="Depth-first listing with dotted positional pathOrder (0, 0.1, ...).",
    )
    @action(detail=False, methods=["get"])
    def flat(self, request):
        return Response(services.get_flat_menu())

    @extend_schema(
        summary="Reorder menu items",
        description="Bulk overwrite of sibling order. All-or-nothing: unknown ids abort the batch.",
        request=MenuReorderSerializer,
        responses={
            200: MenuItemSerializer(many=True),
            404: OpenApiResponse(description="One or more ids do not exist"),
        },
    )
    @action(detail=False, methods=["post"])
    def reorder(self, request):
        serializer = MenuReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        menu_items = services.reorder_menu_items(serializer.validated_data["items"])
        return Response(MenuItemSerializer(menu_items, many=True).data)
