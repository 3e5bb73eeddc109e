"""DRF exception handler that renders domain errors.

Configured through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``. Domain errors
become ``{"detail", "code", "target"}`` bodies with the status carried by
the exception class; everything else falls through to DRF's default
handler.
"""

from __future__ import annotations

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    if isinstance(exc, DomainError):
        view = context.get("view")
        if exc.status_code >= 500:
            logger.error(f"Domain error in {view.__class__.__name__}: {exc.message}", exc_info=True)
        else:
            logger.warning(
                f"Domain error in {view.__class__.__name__}: {exc.code} {exc.message} (target={exc.target})"
            )
        return Response(
            {"detail": exc.message, "code": exc.code, "target": exc.target},
            status=exc.status_code,
        )
    return drf_exception_handler(exc, context)
