"""
Main GraphQL schema definition using Strawberry
"""
import logging

import strawberry
from graphql import GraphQLError, get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter

from blog_api.config import settings
from blog_api.exceptions import BlogAPIError
from blog_api.graphql.context import RequestContext, get_context
from blog_api.graphql.mutations import Mutation
from blog_api.graphql.queries import Query

logger = logging.getLogger(__name__)


def should_mask_error(error: GraphQLError) -> bool:
    """
    Hide everything except deliberate client errors.

    Parse/validation errors (no original error) and ``BlogAPIError``
    subclasses pass through; any other exception raised while resolving
    is replaced by a generic message.
    """
    original = error.original_error
    if original is None or isinstance(original, (BlogAPIError, GraphQLError)):
        return False
    return True


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskErrors(should_mask_error=should_mask_error)],
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup so type errors fail fast."""
    graphql_schema = schema._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        raise RuntimeError(f"GraphQL schema validation failed: {'; '.join(map(str, errors))}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        raise RuntimeError(f"GraphQL introspection failed: {'; '.join(map(str, result.errors))}")

    logger.info("GraphQL schema validation successful")


def create_graphql_router() -> GraphQLRouter[RequestContext, None]:
    """Create the FastAPI router serving the schema at ``/graphql``."""
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if settings.DEBUG else None,
        context_getter=get_context,
    )
