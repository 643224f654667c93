"""Translate failed ServiceResults into DRF responses."""

from rest_framework import status
from rest_framework.response import Response

from marketplace.services.base import ErrorCodes, ServiceResult

STATUS_BY_ERROR = {
    ErrorCodes.BUYER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.CURRENCY_NOT_DEFINED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCodes.EXCHANGE_RATE_NOT_DEFINED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCodes.UPSTREAM_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCodes.PAYMENT_PROCESSOR_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def error_response(result: ServiceResult) -> Response:
    """Response for a failed result: ``{"detail": ..., "code": ...}`` with the matching status."""
    http_status = STATUS_BY_ERROR.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"detail": result.error_detail, "code": result.error}, status=http_status)
