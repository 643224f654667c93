# Shared helpers for the storefront middleware

from .concurrency import run_concurrently
from .logging_utils import mask_value, sanitize_payload

__all__ = ["mask_value", "run_concurrently", "sanitize_payload"]
