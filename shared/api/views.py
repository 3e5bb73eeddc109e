"""Operational endpoints shared by the project."""

from __future__ import annotations

import structlog
from django.conf import settings  # type: ignore
from django.db import DatabaseError, connection  # type: ignore
from django.http import JsonResponse  # type: ignore
from django.views.decorators.http import require_GET  # type: ignore

logger = structlog.get_logger(__name__)


def _backend_name(dotted_path: str) -> str:
    return dotted_path.rsplit(".", 1)[-1]


@require_GET
def healthz(request):
    """Liveness probe: database round trip plus the configured integrations."""
    backends = {
        "chat": _backend_name(settings.CHAT_ROOM_PROVIDER),
        "payments": _backend_name(settings.PAYMENT_GATEWAY),
    }
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as exc:
        logger.error("healthz.database_unavailable", error=str(exc))
        return JsonResponse(
            {"status": "unhealthy", "database": "unavailable", "backends": backends},
            status=503,
        )

    logger.info("healthz.ok", **backends)
    return JsonResponse({"status": "healthy", "database": "connected", "backends": backends})
