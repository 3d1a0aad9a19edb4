"""
Pydantic schemas for the User resource as exchanged over HTTP.

Every field is optional on input: a missing email or an empty role list is a
business rule violation reported by the service as "Invalid user", not a
framework validation error.
"""

from typing import Optional, List

from pydantic import Field

from user_directory.core.schemas import BaseSchema


class UserDto(BaseSchema):
    """Wire representation of a user, used for both requests and responses."""
    id: Optional[int] = Field(None, description="Assigned by the server on creation; ignored on input.")
    name: Optional[str] = Field(None, description="Display name.")
    email: Optional[str] = Field(None, description="Unique email address. Required.")
    roles: Optional[List[str]] = Field(None, description="Ordered role names. At least one is required.")
