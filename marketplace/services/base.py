"""
Service layer primitives.

Services never let a collaborator's exception reach the view: every public
operation returns a ServiceResult whose error code tells "not found",
"upstream failure" and "invalid input" apart.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorCodes:
    """Error codes carried by failed ServiceResults (see utils.api_responses for HTTP mapping)."""

    BUYER_NOT_FOUND = "buyer_not_found"
    PRODUCT_NOT_FOUND = "product_not_found"
    ORDER_NOT_FOUND = "order_not_found"

    # Platform, card processor and mail transport
    UPSTREAM_ERROR = "upstream_error"
    PAYMENT_PROCESSOR_ERROR = "payment_processor_error"
    EMAIL_FAILED = "email_failed"

    CURRENCY_NOT_DEFINED = "currency_not_defined"
    EXCHANGE_RATE_NOT_DEFINED = "exchange_rate_not_defined"

    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"

    INTERNAL_ERROR = "internal_error"


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    ``value`` is set when ``ok``; ``error`` (an ErrorCodes member) and
    ``error_detail`` when not.

        >>> result = service_err(ErrorCodes.BUYER_NOT_FOUND, "Buyer 0001 does not exist")
        >>> result.ok, result.error
        (False, 'buyer_not_found')
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T = None) -> ServiceResult[T]:
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Gives each service a logger named after its class and the
    ``log_performance`` decorator for its public operations.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """Log duration and outcome; failed ServiceResults are logged here and nowhere else."""

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            operation = f"{self.__class__.__name__}.{func.__name__}"
            started = time.perf_counter()
            self.logger.debug(f"{operation} started")

            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                elapsed_ms = (time.perf_counter() - started) * 1000
                self.logger.error(f"{operation} raised after {elapsed_ms:.2f}ms: {str(e)}", exc_info=True)
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000
            if isinstance(result, ServiceResult) and not result.ok:
                self.logger.warning(
                    f"{operation} failed with '{result.error}' in {elapsed_ms:.2f}ms: {result.error_detail}"
                )
            else:
                self.logger.info(f"{operation} completed in {elapsed_ms:.2f}ms")
            return result

        return wrapper
