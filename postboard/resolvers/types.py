from datetime import datetime
from typing import List, Optional

import strawberry

from postboard.db import models_post, models_user
from postboard.schemas import schemas_user


@strawberry.type
class User:
    id: int
    username: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: models_user.User) -> "User":
        return cls(
            id=user.id,
            username=user.username,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@strawberry.type
class Post:
    id: int
    title: str
    creator_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, post: models_post.Post) -> "Post":
        return cls(
            id=post.id,
            title=post.title,
            creator_id=post.creator_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


@strawberry.type
class FieldError:
    field: str
    message: str


@strawberry.type
class UserResponse:
    errors: Optional[List[FieldError]] = None
    user: Optional[User] = None

    @classmethod
    def from_result(cls, result: schemas_user.UserResult) -> "UserResponse":
        if result.errors:
            return cls(errors=[FieldError(field=e.field, message=e.message) for e in result.errors])
        return cls(user=User.from_model(result.user) if result.user is not None else None)


@strawberry.input
class UsernamePasswordInput:
    username: str
    password: str

    def to_schema(self) -> schemas_user.UsernamePasswordInput:
        return schemas_user.UsernamePasswordInput(username=self.username, password=self.password)
