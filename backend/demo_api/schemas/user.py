"""
SDLC Demo API — User Schemas
=============================
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: str
    created_at: str


class UserCreate(BaseModel):
    """
    Body of POST /api/users.

    Both fields are optional at the schema level so a missing field is
    reported with the same 400 message as an empty one.
    """

    name: Optional[str] = None
    email: Optional[str] = None


class UserListResponse(BaseModel):
    data: List[User]
    total: int
    timestamp: str


class UserResponse(BaseModel):
    data: User
    timestamp: str
    message: Optional[str] = None
