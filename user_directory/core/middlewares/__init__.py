from .logging import request_logging_middleware
from .rate_limit import limiter, rate_limit_exceeded_handler

__all__ = ["request_logging_middleware", "limiter", "rate_limit_exceeded_handler"]
