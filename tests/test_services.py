"""
Direct service-layer tests — exercises the persistence functions without
GraphQL, covering owner scoping, pagination order and cascades.
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.services import comment_service, post_service, user_service


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_user(db: AsyncSession, email: str = "svc@example.com"):
    return await user_service.create_user(db, name="Service User", email=email, password_hash="x")


# ---------------------------------------------------------------------------
# user_service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_and_get_user(db_session: AsyncSession):
    user = await _create_user(db_session)
    assert user.id is not None

    fetched = await user_service.get_user(db_session, user.id)
    assert fetched is not None
    assert fetched.email == "svc@example.com"

    by_email = await user_service.get_user_by_email(db_session, "svc@example.com")
    assert by_email.id == user.id


@pytest.mark.asyncio
async def test_get_missing_user_returns_none(db_session: AsyncSession):
    assert await user_service.get_user(db_session, 999) is None
    assert await user_service.get_user_by_email(db_session, "nobody@example.com") is None


@pytest.mark.asyncio
async def test_get_users_limit_and_offset(db_session: AsyncSession):
    for i in range(5):
        await _create_user(db_session, f"u{i}@example.com")

    page = await user_service.get_users(db_session, limit=2, offset=1)
    assert [u.email for u in page] == ["u1@example.com", "u2@example.com"]
    assert await user_service.count_users(db_session) == 5


@pytest.mark.asyncio
async def test_delete_user(db_session: AsyncSession):
    user = await _create_user(db_session)
    assert await user_service.delete_user(db_session, user.id) == 1
    assert await user_service.get_user(db_session, user.id) is None


# ---------------------------------------------------------------------------
# post_service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_post_scoped_to_owner(db_session: AsyncSession):
    owner = await _create_user(db_session, "owner@example.com")
    other = await _create_user(db_session, "other@example.com")
    post = await post_service.create_post(db_session, user_id=owner.id, content="original")

    assert await post_service.update_post(db_session, post.id, other.id, "hacked") == 0
    assert await post_service.update_post(db_session, post.id, owner.id, "edited") == 1

    db_session.expire_all()
    refreshed = await post_service.get_post(db_session, post.id)
    assert refreshed.content == "edited"


@pytest.mark.asyncio
async def test_delete_post_scoped_to_owner(db_session: AsyncSession):
    owner = await _create_user(db_session, "owner@example.com")
    other = await _create_user(db_session, "other@example.com")
    post = await post_service.create_post(db_session, user_id=owner.id, content="keep me")

    assert await post_service.delete_post(db_session, post.id, other.id) == 0
    assert await post_service.count_posts(db_session) == 1
    assert await post_service.delete_post(db_session, post.id, owner.id) == 1
    assert await post_service.count_posts(db_session) == 0


@pytest.mark.asyncio
async def test_get_posts_by_user_and_bulk_delete(db_session: AsyncSession):
    alice = await _create_user(db_session, "alice@example.com")
    bob = await _create_user(db_session, "bob@example.com")
    for i in range(3):
        await post_service.create_post(db_session, user_id=alice.id, content=f"a{i}")
    await post_service.create_post(db_session, user_id=bob.id, content="b0")

    alice_posts = await post_service.get_posts_by_user(db_session, alice.id)
    assert [p.content for p in alice_posts] == ["a0", "a1", "a2"]

    assert await post_service.delete_posts_by_user(db_session, alice.id) == 3
    remaining = await post_service.get_posts(db_session, limit=10)
    assert [p.content for p in remaining] == ["b0"]


# ---------------------------------------------------------------------------
# comment_service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comments_by_post(db_session: AsyncSession):
    author = await _create_user(db_session)
    first = await post_service.create_post(db_session, user_id=author.id, content="one")
    second = await post_service.create_post(db_session, user_id=author.id, content="two")

    await comment_service.create_comment(db_session, author.id, first.id, "c1")
    await comment_service.create_comment(db_session, author.id, first.id, "c2")
    await comment_service.create_comment(db_session, author.id, second.id, "c3")

    comments = await comment_service.get_comments_by_post(db_session, first.id)
    assert [c.content for c in comments] == ["c1", "c2"]


@pytest.mark.asyncio
async def test_comment_writes_scoped_to_owner(db_session: AsyncSession):
    owner = await _create_user(db_session, "owner@example.com")
    other = await _create_user(db_session, "other@example.com")
    post = await post_service.create_post(db_session, user_id=owner.id, content="post")
    comment = await comment_service.create_comment(db_session, owner.id, post.id, "mine")

    assert await comment_service.update_comment(db_session, comment.id, other.id, "x") == 0
    assert await comment_service.delete_comment(db_session, comment.id, other.id) == 0
    assert await comment_service.update_comment(db_session, comment.id, owner.id, "edited") == 1

    db_session.expire_all()
    assert (await comment_service.get_comment(db_session, comment.id)).content == "edited"
    assert await comment_service.delete_comment(db_session, comment.id, owner.id) == 1
    assert await comment_service.get_comment(db_session, comment.id) is None


@pytest.mark.asyncio
async def test_delete_comments_by_user(db_session: AsyncSession):
    alice = await _create_user(db_session, "alice@example.com")
    bob = await _create_user(db_session, "bob@example.com")
    post = await post_service.create_post(db_session, user_id=alice.id, content="post")
    await comment_service.create_comment(db_session, alice.id, post.id, "a")
    await comment_service.create_comment(db_session, bob.id, post.id, "b")

    assert await comment_service.delete_comments_by_user(db_session, alice.id) == 1
    left = await comment_service.get_comments_by_post(db_session, post.id)
    assert [c.content for c in left] == ["b"]
