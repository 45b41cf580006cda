from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nexgen.core.constants import NEVER_LOGGED_IN


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class UserBase(BaseModel):
    username: str
    email: str
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(UserBase):
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    password: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(UserBase):
    id: str
    # Salted hash produced by nexgen.core.security.hash_password.
    password: Optional[str] = None
    created_at: str
    last_login: str = NEVER_LOGGED_IN


class UserRead(UserBase):
    id: str
    created_at: str
    last_login: str

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls.model_validate(user.model_dump(exclude={"password"}))


class LoginRequest(BaseModel):
    username: str
    password: str


__all__ = [
    "LoginRequest",
    "User",
    "UserBase",
    "UserCreate",
    "UserRead",
    "UserRole",
    "UserStatus",
    "UserUpdate",
]
