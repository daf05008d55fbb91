from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import MenuItemViewSet

app_name = 'menus'

router = DefaultRouter()
router.register(r'', MenuItemViewSet, basename='menu')

urlpatterns = [
    path('', include(router.urls)),
]

# =============================================================================
# Generated URL patterns:
# =============================================================================
# GET    /api/menu/             - menu tree (public)
# GET    /api/menu/flat/        - flattened tree with pathOrder (public)
# GET    /api/menu/{id}/        - menu item detail (public)
# POST   /api/menu/             - create menu item
# PUT    /api/menu/{id}/        - update menu item
# PATCH  /api/menu/{id}/        - partial update
# DELETE /api/menu/{id}/        - delete; children move to the former parent
# POST   /api/menu/reorder/     - bulk order update (all-or-nothing)
# =============================================================================
