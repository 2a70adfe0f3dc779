import structlog
from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from budgetapi import __version__

logger = structlog.get_logger()


class OkView(APIView):
    def get(self, request, *args, **kwargs):
        return Response({"ok": True})


class HealthView(APIView):
    """Report service version after a database round trip."""

    def get(self, request, *args, **kwargs):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError as exc:
            logger.error("health.database_unavailable", error=str(exc))
            return Response(
                {"status": "unavailable", "version": __version__},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return Response({"status": "ok", "version": __version__})


def not_found(request, exception=None):
    return JsonResponse(
        {"statusCode": 404, "error": "Not found", "success": False},
        status=status.HTTP_404_NOT_FOUND,
    )
