"""
GraphQL object types.

Relationship fields are resolved on access by looking up the stored
foreign id; nothing is pre-joined.  Each relationship resolver opens
its own session from the request context.
"""
import strawberry

from blog_api import models
from blog_api.services import comment_service, post_service, user_service


@strawberry.type
class User:
    id: strawberry.ID
    name: str
    email: str

    pk: strawberry.Private[int]

    @classmethod
    def from_model(cls, user: models.User) -> "User":
        return cls(id=strawberry.ID(str(user.id)), name=user.name, email=user.email, pk=user.id)

    @strawberry.field(description="Posts written by this user")
    async def posts(self, info: strawberry.Info) -> list["Post"]:
        async with info.context.session() as db:
            rows = await post_service.get_posts_by_user(db, self.pk)
        return [Post.from_model(p) for p in rows]


@strawberry.type
class Post:
    id: strawberry.ID
    content: str

    pk: strawberry.Private[int]
    user_id: strawberry.Private[int]

    @classmethod
    def from_model(cls, post: models.Post) -> "Post":
        return cls(
            id=strawberry.ID(str(post.id)),
            content=post.content,
            pk=post.id,
            user_id=post.user_id,
        )

    @strawberry.field(description="Comments left on this post")
    async def comments(self, info: strawberry.Info) -> list["Comment"]:
        async with info.context.session() as db:
            rows = await comment_service.get_comments_by_post(db, self.pk)
        return [Comment.from_model(c) for c in rows]


@strawberry.type
class Comment:
    id: strawberry.ID
    content: str

    pk: strawberry.Private[int]
    user_id: strawberry.Private[int]
    post_id: strawberry.Private[int]

    @classmethod
    def from_model(cls, comment: models.Comment) -> "Comment":
        return cls(
            id=strawberry.ID(str(comment.id)),
            content=comment.content,
            pk=comment.id,
            user_id=comment.user_id,
            post_id=comment.post_id,
        )

    @strawberry.field
    async def author(self, info: strawberry.Info) -> User:
        async with info.context.session() as db:
            user = await user_service.get_user(db, self.user_id)
        if user is None:
            # Orphaned comment; reported to the client as a masked error.
            raise LookupError(f"author {self.user_id} of comment {self.pk} no longer exists")
        return User.from_model(user)

    @strawberry.field
    async def post(self, info: strawberry.Info) -> Post:
        async with info.context.session() as db:
            post = await post_service.get_post(db, self.post_id)
        if post is None:
            raise LookupError(f"post {self.post_id} of comment {self.pk} no longer exists")
        return Post.from_model(post)


@strawberry.type
class LoginResponse:
    user: User
    token: str
