# postboard/schemas/schemas_user.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel

from postboard.auth.auth_util import MAX_PASSWORD_BYTES
from postboard.db.models_user import USERNAME_MAX_LENGTH, User

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6


class UsernamePasswordInput(BaseModel):
    username: str
    password: str


class FieldError(BaseModel):
    field: str
    message: str


@dataclass
class UserResult:
    """Outcome of register/login: either a user or a list of field errors."""
    user: Optional[User] = None
    errors: List[FieldError] = field(default_factory=list)

    @classmethod
    def failure(cls, field_name: str, message: str) -> "UserResult":
        return cls(errors=[FieldError(field=field_name, message=message)])


def validate_register(options: UsernamePasswordInput) -> List[FieldError]:
    """Checks registration input; only the first problem found is reported."""
    if len(options.username) < USERNAME_MIN_LENGTH:
        return [FieldError(field="username", message="Provided Username is Too Short")]
    if len(options.username) > USERNAME_MAX_LENGTH:
        return [FieldError(field="username", message="Provided Username is Too Long")]
    if len(options.password) < PASSWORD_MIN_LENGTH:
        return [FieldError(field="password", message="Provided Password is Too Short")]
    if len(options.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return [FieldError(field="password", message="Provided Password is Too Long")]
    return []
