from typing import List, Optional

import strawberry
from strawberry.types import Info

from postboard.resolvers.types import Post
from postboard.services import post_service


@strawberry.type
class PostQuery:
    @strawberry.field
    async def posts(self, info: Info) -> List[Post]:
        async with info.context.db() as db:
            posts = await post_service.list_posts(db)
        return [Post.from_model(p) for p in posts]

    @strawberry.field
    async def post(self, id: int, info: Info) -> Optional[Post]:
        async with info.context.db() as db:
            post = await post_service.get_post(db, id)
        return Post.from_model(post) if post is not None else None


@strawberry.type
class PostMutation:
    @strawberry.mutation
    async def create_post(self, title: str, info: Info) -> Post:
        ctx = info.context
        user_id = post_service.require_user(ctx.session)
        async with ctx.db() as db:
            post = await post_service.create_post(db, title, user_id)
        return Post.from_model(post)

    @strawberry.mutation
    async def update_post(self, id: int, info: Info, title: Optional[str] = None) -> Optional[Post]:
        ctx = info.context
        user_id = post_service.require_user(ctx.session)
        async with ctx.db() as db:
            post = await post_service.update_post(db, id, title, user_id)
        return Post.from_model(post) if post is not None else None

    @strawberry.mutation
    async def delete_post(self, id: int, info: Info) -> bool:
        ctx = info.context
        user_id = post_service.require_user(ctx.session)
        async with ctx.db() as db:
            return await post_service.delete_post(db, id, user_id)
