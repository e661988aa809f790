from typing import Optional

import strawberry
from strawberry.types import Info

from postboard.resolvers.types import User, UserResponse, UsernamePasswordInput
from postboard.services import auth_service


@strawberry.type
class UserQuery:
    @strawberry.field
    async def me(self, info: Info) -> Optional[User]:
        ctx = info.context
        async with ctx.db() as db:
            user = await auth_service.me(db, ctx.session)
        return User.from_model(user) if user is not None else None


@strawberry.type
class UserMutation:
    @strawberry.mutation
    async def register(self, options: UsernamePasswordInput, info: Info) -> UserResponse:
        ctx = info.context
        async with ctx.db() as db:
            result = await auth_service.register(db, ctx.session, options.to_schema())
        return UserResponse.from_result(result)

    @strawberry.mutation
    async def login(self, options: UsernamePasswordInput, info: Info) -> UserResponse:
        ctx = info.context
        async with ctx.db() as db:
            result = await auth_service.login(db, ctx.session, options.to_schema())
        return UserResponse.from_result(result)
