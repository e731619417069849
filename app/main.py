from datetime import timedelta
from typing import Any, cast
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.errors import init_sentry
from app.core.logging_config import get_logger
from app.api import blog, messages
from app.api.errors import register_exception_handlers
from app.middleware.context import RequestContextMiddleware
from app.middleware.security import SecureHeadersMiddleware
from app.services.messages import MessageStore
from app.services.views import ViewCounter

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("=" * 50)
    logger.info(f"{settings.PROJECT_NAME} API Starting")
    logger.info(f"Message bucket: {app.state.message_store.bucket_key()}")
    logger.info(f"View dedup window: {app.state.view_counter.window}")
    logger.info("=" * 50)
    if settings.SENTRY_DSN:
        init_sentry(settings.SENTRY_DSN, environment=settings.ENVIRONMENT)

    yield

    logger.info(f"{settings.PROJECT_NAME} API Stopped")


app = FastAPI(title=settings.PROJECT_NAME, openapi_url=f"{settings.API_V1_STR}/openapi.json", lifespan=lifespan)

# In-memory state lives for the lifetime of the process
app.state.message_store = MessageStore()
app.state.view_counter = ViewCounter(window=timedelta(hours=settings.VIEW_DEDUP_WINDOW_HOURS))

register_exception_handlers(app)

# Innermost: turns route exceptions into the 500 envelope, so every response
# (errors included) still passes through secure headers and CORS below
app.add_middleware(cast(Any, RequestContextMiddleware))

app.add_middleware(cast(Any, SecureHeadersMiddleware), enabled=settings.SECURE_HEADERS_ENABLED)

app.add_middleware(
    cast(Any, CORSMiddleware),
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.include_router(messages.router, prefix=f"{settings.API_V1_STR}/messages", tags=["messages"])
app.include_router(blog.router, prefix=f"{settings.API_V1_STR}/blog", tags=["blog"])


@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    logger.info("Serving", host=settings.HOST, port=settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
