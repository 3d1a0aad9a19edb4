from user_directory.core.schemas.base import BaseSchema


class ErrorResponse(BaseSchema):
    """Body returned for every handled error."""
    error: str
    details: str
