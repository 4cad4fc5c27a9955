from pydantic import Field

from ..models.user import UserBase

class UserCreate(UserBase):
    password: str = Field(..., min_length=1)
