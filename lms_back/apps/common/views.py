import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny
from django.conf import settings
from django.db import connection, DatabaseError
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiResponse

logger = logging.getLogger(__name__)


class HealthCheckView(APIView):
    """Liveness probe: process up and database reachable"""
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        tags=["Health"],
        summary="LMS backend health check",
        description="Reports API status and database connectivity.",
        responses={
            200: OpenApiResponse(description="healthy"),
            503: OpenApiResponse(description="database unreachable"),
        }
    )
    def get(self, request):
        payload = {
            "service": settings.SERVICE_NAME,
            "status": "healthy",
            "database": "connected",
            "timestamp": timezone.now().isoformat(),
        }

        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError as e:
            logger.error(f"Health check failed, database unreachable: {e}")
            payload.update(status="unhealthy", database="disconnected")
            return Response(payload, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response(payload)
