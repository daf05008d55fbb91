from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ActivityViewSet

app_name = 'activities'

router = DefaultRouter()
router.register(r'', ActivityViewSet, basename='activity')

urlpatterns = [
    path('', include(router.urls)),
]

# =============================================================================
# Generated URL patterns:
# =============================================================================
# GET    /api/activities/           - activity list (?kind=, paginated)
# POST   /api/activities/           - create activity
# GET    /api/activities/{id}/      - activity detail
# PUT    /api/activities/{id}/      - update activity
# PATCH  /api/activities/{id}/      - partial update
# DELETE /api/activities/{id}/      - delete activity
# =============================================================================
