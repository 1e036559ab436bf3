from socialnest.core.middleware.request_id import request_id_middleware
from socialnest.core.middleware.error_handler import (
    error_envelope_middleware,
    http_exception_handler,
    rate_limit_exceeded_handler,
    storage_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "request_id_middleware",
    "error_envelope_middleware",
    "http_exception_handler",
    "rate_limit_exceeded_handler",
    "storage_exception_handler",
    "validation_exception_handler",
]
