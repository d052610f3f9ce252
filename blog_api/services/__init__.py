# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# database access for a single collection:
#
#   user_service     — lookup, listing, signup insert, account removal
#   post_service     — CRUD for Post, scoped to the owning user on writes
#   comment_service  — CRUD for Comment, scoped to the owning user on writes
#
# All service functions accept an AsyncSession as their first argument
# so that the caller controls the transaction boundary (see
# ``blog_api.database.session_scope``).  They flush but never commit.
