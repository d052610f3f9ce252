"""
Root Query type
"""
import strawberry

from blog_api.config import settings
from blog_api.graphql.access_control import decode_id
from blog_api.graphql.types import Post, User
from blog_api.services import post_service, user_service


def clamp_page(first: int | None, after: int | None) -> tuple[int, int]:
    """
    Translate ``first``/``after`` into a (limit, offset) pair.

    ``first`` defaults to, and never exceeds, ``settings.MAX_PAGE_SIZE``;
    ``after`` is a plain skip count.  Negative values are treated as 0.
    """
    limit = settings.MAX_PAGE_SIZE if first is None else first
    limit = max(0, min(limit, settings.MAX_PAGE_SIZE))
    offset = max(0, after or 0)
    return limit, offset


@strawberry.type
class Query:
    @strawberry.field(description="Return the current logged in user")
    def user(self, info: strawberry.Info) -> User | None:
        current = info.context.user
        return User.from_model(current) if current else None

    @strawberry.field(description="Find a single user by id")
    async def user_by_id(self, info: strawberry.Info, id: strawberry.ID) -> User | None:
        user_id = decode_id(id)
        if user_id is None:
            return None
        async with info.context.session() as db:
            user = await user_service.get_user(db, user_id)
        return User.from_model(user) if user else None

    @strawberry.field(description="Find a single post by id")
    async def post_by_id(self, info: strawberry.Info, id: strawberry.ID) -> Post | None:
        post_id = decode_id(id)
        if post_id is None:
            return None
        async with info.context.session() as db:
            post = await post_service.get_post(db, post_id)
        return Post.from_model(post) if post else None

    @strawberry.field(description="List all users")
    async def users(
        self,
        info: strawberry.Info,
        first: int | None = None,
        after: int | None = None,
    ) -> list[User]:
        limit, offset = clamp_page(first, after)
        async with info.context.session() as db:
            rows = await user_service.get_users(db, limit=limit, offset=offset)
        return [User.from_model(u) for u in rows]

    @strawberry.field(description="List all posts")
    async def posts(
        self,
        info: strawberry.Info,
        first: int | None = None,
        after: int | None = None,
    ) -> list[Post]:
        limit, offset = clamp_page(first, after)
        async with info.context.session() as db:
            rows = await post_service.get_posts(db, limit=limit, offset=offset)
        return [Post.from_model(p) for p in rows]

    @strawberry.field(description="Count all created posts")
    async def count_posts(self, info: strawberry.Info) -> int:
        async with info.context.session() as db:
            return await post_service.count_posts(db)

    @strawberry.field(description="Count all created users")
    async def count_users(self, info: strawberry.Info) -> int:
        async with info.context.session() as db:
            return await user_service.count_users(db)
