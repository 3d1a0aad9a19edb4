from user_directory.core.schemas.base import BaseSchema
from user_directory.core.schemas.error_response import ErrorResponse

__all__ = ["BaseSchema", "ErrorResponse"]
