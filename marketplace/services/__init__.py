"""
Shared service layer primitives.

Usage:
    from marketplace.services import BaseService, ErrorCodes, service_ok, service_err

    result = buyer_service.get(buyer_id)
    if result.ok:
        aggregate = result.value
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

__all__ = [
    "BaseService",
    "ErrorCodes",
    "ServiceResult",
    "service_err",
    "service_ok",
]
