"""
Root Mutation type

Every mutation except ``signup`` and ``login`` starts with
``require_user``.  Updates and deletes of posts and comments are scoped
to the caller; targeting someone else's record is a silent no-op that
still reports success.
"""
import logging

import strawberry
from starlette.concurrency import run_in_threadpool

from blog_api.exceptions import AuthenticationError, ValidationError
from blog_api.graphql.access_control import decode_id, require_user
from blog_api.graphql.types import Comment, LoginResponse, Post, User
from blog_api.security import hash_password, issue_token, verify_password
from blog_api.services import comment_service, post_service, user_service

logger = logging.getLogger(__name__)

SIGNUP_FAILED_MESSAGE = "Please validate your input"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
POST_NOT_FOUND_MESSAGE = "Couldn't find a post with this id"
COMMENT_NOT_FOUND_MESSAGE = "Couldn't find a comment with this id"


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Sign up a new user")
    async def signup(self, info: strawberry.Info, name: str, email: str, password: str) -> bool:
        # Any failure here, a duplicate email included, reaches the client
        # as the same generic validation error; the cause is only logged.
        try:
            async with info.context.session() as db:
                if await user_service.get_user_by_email(db, email) is not None:
                    raise ValidationError("There's already a user registered with this email")
                password_hash = await run_in_threadpool(hash_password, password)
                await user_service.create_user(db, name=name, email=email, password_hash=password_hash)
        except Exception as exc:
            logger.warning("Signup rejected for email=%s: %s", email, exc, exc_info=True)
            raise ValidationError(SIGNUP_FAILED_MESSAGE) from exc
        return True

    @strawberry.mutation(description="Login and retrieve access token")
    async def login(self, info: strawberry.Info, email: str, password: str) -> LoginResponse:
        async with info.context.session() as db:
            user = await user_service.get_user_by_email(db, email)

        if user is None or not await run_in_threadpool(verify_password, password, user.password):
            logger.info("Failed login for email=%s", email)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        token = await run_in_threadpool(issue_token, str(user.id))
        return LoginResponse(user=User.from_model(user), token=token)

    @strawberry.mutation(description="Delete user and all related information")
    async def delete_account(self, info: strawberry.Info) -> bool:
        user = require_user(info)
        async with info.context.session() as db:
            await user_service.delete_user(db, user.id)
            posts = await post_service.delete_posts_by_user(db, user.id)
            comments = await comment_service.delete_comments_by_user(db, user.id)
        logger.info(
            "Deleted account id=%s with %d post(s) and %d comment(s)", user.id, posts, comments
        )
        return True

    @strawberry.mutation(description="Create a new post")
    async def create_post(self, info: strawberry.Info, content: str) -> Post:
        user = require_user(info)
        async with info.context.session() as db:
            post = await post_service.create_post(db, user_id=user.id, content=content)
        return Post.from_model(post)

    @strawberry.mutation(description="Update an existing post created by the user")
    async def update_post(self, info: strawberry.Info, id: strawberry.ID, content: str) -> Post:
        user = require_user(info)
        post_id = decode_id(id)
        if post_id is None:
            raise ValidationError(POST_NOT_FOUND_MESSAGE)
        async with info.context.session() as db:
            await post_service.update_post(db, post_id, user_id=user.id, content=content)
            post = await post_service.get_post(db, post_id)
        if post is None:
            raise ValidationError(POST_NOT_FOUND_MESSAGE)
        return Post.from_model(post)

    @strawberry.mutation(description="Delete a post created by the user")
    async def delete_post(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        user = require_user(info)
        post_id = decode_id(id)
        if post_id is not None:
            async with info.context.session() as db:
                await post_service.delete_post(db, post_id, user_id=user.id)
        return True

    @strawberry.mutation(description="Comment a post")
    async def create_comment(
        self, info: strawberry.Info, post_id: strawberry.ID, content: str
    ) -> Comment:
        user = require_user(info)
        target = decode_id(post_id)
        if target is None:
            raise ValidationError(POST_NOT_FOUND_MESSAGE)
        async with info.context.session() as db:
            comment = await comment_service.create_comment(
                db, user_id=user.id, post_id=target, content=content
            )
        return Comment.from_model(comment)

    @strawberry.mutation(description="Update an existing comment created by the user")
    async def update_comment(
        self, info: strawberry.Info, id: strawberry.ID, content: str
    ) -> Comment:
        user = require_user(info)
        comment_id = decode_id(id)
        if comment_id is None:
            raise ValidationError(COMMENT_NOT_FOUND_MESSAGE)
        async with info.context.session() as db:
            await comment_service.update_comment(db, comment_id, user_id=user.id, content=content)
            comment = await comment_service.get_comment(db, comment_id)
        if comment is None:
            raise ValidationError(COMMENT_NOT_FOUND_MESSAGE)
        return Comment.from_model(comment)

    @strawberry.mutation(description="Delete a comment created by the user")
    async def delete_comment(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        user = require_user(info)
        comment_id = decode_id(id)
        if comment_id is not None:
            async with info.context.session() as db:
                await comment_service.delete_comment(db, comment_id, user_id=user.id)
        return True
