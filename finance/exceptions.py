"""Domain errors and their mapping to API responses."""

from decimal import Decimal

import structlog
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger()


class FinanceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request can not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(FinanceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Entity not found"


class RateNotFound(NotFound):
    default_message = "Currency rate not found"


class NoRights(FinanceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "User has no rights for this action"


class InsufficientFunds(FinanceError):
    default_message = "User balance is less than the transaction amount"


class EmptyRequest(FinanceError):
    default_message = "Update request is empty"


class BudgetLimitExceeded(FinanceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Budget limit exceeded"

    def __init__(self, message: str | None = None, remaining: Decimal = Decimal("0")):
        super().__init__(message)
        self.remaining = remaining


class IntegrationError(FinanceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Upstream dependency failed"


class BadData(FinanceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Malformed data"


def exception_handler(exc, context):
    """Render domain errors as JSON; defer everything else to DRF."""
    if not isinstance(exc, FinanceError):
        return drf_exception_handler(exc, context)

    request = context.get("request")
    path = request.path if request is not None else ""
    logger.info(
        "api.domain_error",
        error=exc.__class__.__name__,
        message=exc.message,
        path=path,
    )
    return Response(
        {
            "timestamp": timezone.now().isoformat(),
            "status": exc.status_code,
            "error": exc.__class__.__name__,
            "message": exc.message,
            "path": path,
        },
        status=exc.status_code,
    )
