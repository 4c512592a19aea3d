import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import BOMValidationException, DomainException

logger = logging.getLogger('bomplan.api')


def custom_exception_handler(exc, context):
    """
    Map domain errors to 400 responses; everything else goes to the DRF handler.

    Body: ``{"detail": message, "error": code, "details": {...}}``.
    """
    if isinstance(exc, DomainException):
        if isinstance(exc, BOMValidationException):
            logger.info(f"BOM rejected [{exc.code}]: {exc.message}")
        else:
            logger.warning(f"Domain error [{exc.code}]: {exc.message}")

        return Response(
            {
                'detail': exc.message,
                'error': exc.code,
                'details': exc.details,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    return exception_handler(exc, context)
