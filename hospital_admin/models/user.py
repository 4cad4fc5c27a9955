from typing import Optional

from pydantic import ConfigDict, Field

from .base import CamelModel
from ..core.security import UserRole

class UserBase(CamelModel):
    username: str = Field(..., min_length=1)
    role: UserRole = UserRole.STAFF
    name: str = Field(..., min_length=1)
    email: str
    avatar: Optional[str] = None

class User(UserBase):
    model_config = ConfigDict(frozen=True)

    id: int
    password_hash: str
