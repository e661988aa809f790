import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.tools import merge_types

from postboard.config import IS_PROD
from postboard.resolvers.context import get_context
from postboard.resolvers.hello import HelloQuery
from postboard.resolvers.post import PostMutation, PostQuery
from postboard.resolvers.user import UserMutation, UserQuery

Query = merge_types("Query", (HelloQuery, UserQuery, PostQuery))
Mutation = merge_types("Mutation", (UserMutation, PostMutation))

schema = strawberry.Schema(query=Query, mutation=Mutation)

router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide=None if IS_PROD else "graphiql",
)
