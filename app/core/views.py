"""
Infrastructure endpoints that sit outside the settlement API.
"""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Liveness probe for load balancers and container health checks.

    Runs ``SELECT 1``; answers 200 ``{"status": "healthy", "database":
    "connected"}`` or 503 with ``unhealthy`` / ``disconnected``.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)

    return JsonResponse({"status": "healthy", "database": "connected"})
