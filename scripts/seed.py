"""Database seeder for local development and benchmarking."""
import asyncio
import argparse
import random
import time

from blog_api.database import engine, async_session, Base
from blog_api.models import User, Post, Comment
from blog_api.security import hash_password

SEED_PASSWORD = "password123"

TOPICS = ["python", "fastapi", "graphql", "postgresql", "docker", "testing",
          "performance", "security", "asyncio", "sqlalchemy"]


async def seed(small: bool = False):
    num_users = 10 if small else 50
    num_posts = 100 if small else 5000
    max_comments_per_post = 2 if small else 5

    print(f"Seeding: {num_users} users, {num_posts} posts, up to {max_comments_per_post} comments each")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    # One bcrypt hash shared by every seeded account keeps seeding fast.
    password_hash = hash_password(SEED_PASSWORD)

    async with async_session() as session:
        users = []
        for i in range(num_users):
            user = User(
                name=f"User {i}",
                email=f"user_{i:04d}@example.com",
                password=password_hash,
            )
            session.add(user)
            users.append(user)
        await session.flush()
        print(f"  Created {len(users)} users (password: {SEED_PASSWORD})")

        batch_size = 500
        total_comments = 0
        for batch_start in range(0, num_posts, batch_size):
            batch_end = min(batch_start + batch_size, num_posts)
            posts = []
            for i in range(batch_start, batch_end):
                post = Post(
                    content=f"Post {i}: notes on {random.choice(TOPICS)}. " * 5,
                    user_id=random.choice(users).id,
                )
                session.add(post)
                posts.append(post)
            await session.flush()

            for post in posts:
                for _ in range(random.randint(0, max_comments_per_post)):
                    commenter = random.choice(users)
                    session.add(Comment(
                        content=f"Nice write-up! ({commenter.name})",
                        user_id=commenter.id,
                        post_id=post.id,
                    ))
                    total_comments += 1
            await session.flush()

            print(f"  Batch {batch_start}-{batch_end}: posts created")

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Posts: {num_posts}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (100 posts)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
