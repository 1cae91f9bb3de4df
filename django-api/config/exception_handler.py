"""DRF exception handler translating domain errors into HTTP responses.

Every error body has the shape ``{"code": ..., "message": ...}``; DRF's own
errors keep their status and put field errors under ``details``.
"""

import structlog
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from events.domain.errors import DomainError

logger = structlog.get_logger(__name__)

STATUS_BY_CODE = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_EVENT_ID": status.HTTP_400_BAD_REQUEST,
    "INVALID_TICKET_ID": status.HTTP_400_BAD_REQUEST,
    "EVENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TICKET_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "NOT_EVENT_OWNER": status.HTTP_403_FORBIDDEN,
    "INVITEE_MISMATCH": status.HTTP_403_FORBIDDEN,
    "SOLD_OUT": status.HTTP_409_CONFLICT,
    "CAPACITY_EXCEEDED": status.HTTP_409_CONFLICT,
    "ALREADY_RESOLVED": status.HTTP_409_CONFLICT,
    "STATE_CONFLICT": status.HTTP_409_CONFLICT,
    "INVALID_TRANSITION": status.HTTP_409_CONFLICT,
    "EVENT_LOCKED": status.HTTP_409_CONFLICT,
    "EMAIL_TAKEN": status.HTTP_409_CONFLICT,
    "ALREADY_VERIFIED": status.HTTP_409_CONFLICT,
    "STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "LEDGER_INCONSISTENT": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def domain_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, DomainError):
        code = exc.code.value
        http_status = STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST)
        log = logger.error if http_status >= 500 else logger.info
        log("domain_error", code=code, view=view_name, status=http_status)
        return Response({"code": code, "message": exc.message}, status=http_status)

    response = exception_handler(exc, context)
    if response is None:
        logger.exception("unhandled_error", view=view_name)
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request",
            "details": response.data,
        }
    elif isinstance(exc, APIException):
        codes = exc.get_codes()
        response.data = {
            "code": codes.upper() if isinstance(codes, str) else "ERROR",
            "message": str(exc.detail),
        }
    return response
