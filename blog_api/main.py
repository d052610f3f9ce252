import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api import __version__
from blog_api.config import settings
from blog_api.database import engine
from blog_api.exceptions import AuthenticationError
from blog_api.graphql.schema import create_graphql_router, validate_schema
from blog_api.middleware import TimingMiddleware

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    validate_schema()
    logger.info("Blog GraphQL API starting (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()
    logger.info("Blog GraphQL API stopped")


app = FastAPI(
    title="Blog GraphQL API",
    description="GraphQL backend for users, posts and comments",
    version=__version__,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(create_graphql_router())


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    """
    A bearer token that fails verification aborts the whole request.

    Raised while building the GraphQL context, i.e. before execution, so
    the body is shaped like a GraphQL response by hand.
    """
    return JSONResponse(
        status_code=401,
        content={
            "data": None,
            "errors": [{"message": exc.message, "extensions": exc.extensions}],
        },
    )


@app.get("/health")
async def health():
    return {"status": "healthy", "version": __version__}


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "blog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
