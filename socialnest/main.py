import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from socialnest.core.middleware import (
    error_envelope_middleware,
    http_exception_handler,
    rate_limit_exceeded_handler,
    request_id_middleware,
    storage_exception_handler,
    validation_exception_handler,
)
from socialnest.database import init_db
from socialnest.dependencies import get_settings
from socialnest.interactions.router import router as interactions_router
from socialnest.posts.router import router as posts_router
from socialnest.profiles.router import router as profiles_router
from socialnest.rate_limit import limiter
from socialnest.social_graph.router import router as social_router
from socialnest.users.router import router as users_router

logger = logging.getLogger(__name__)


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## SocialNest API

Backend for a small social network:

* **Users**: registration, email/password login (token in the body and an
  HttpOnly `jwt` cookie), logout, own-account management.
* **Profiles**: one public profile per account with a unique username and a photo.
* **Social graph**: follow / unfollow; followers and following lists are kept
  symmetric across both profiles.
* **Posts**: text posts with JPEG/PNG media, comments and likes.

### Authentication
Protected endpoints accept either
```
Authorization: Bearer <access_token>
```
or the `jwt` cookie set by `POST /api/users/auth`.

### Error shape
All errors return a consistent JSON envelope:
```json
{ "error": { "code": "post_not_found", "message": "Post not found." }, "request_id": "..." }
```
Request validation errors are returned as `400 validation_failed`.

### Rate limits
Login, registration and follow are rate limited; `429 rate_limited` is returned when exceeded.
"""

_TAGS_METADATA = [
    {"name": "users", "description": "Registration, login / logout and own-account CRUD."},
    {
        "name": "profiles",
        "description": "Create, view and update profiles; upload a profile photo.",
    },
    {
        "name": "social-graph",
        "description": (
            "Follow and unfollow other accounts and list followers / following. "
            "Both profiles involved in an edge are updated together."
        ),
    },
    {"name": "posts", "description": "Create, list, update and delete posts; upload media."},
    {
        "name": "interactions",
        "description": "Comments (author-only edit/delete) and likes (one per account per post).",
    },
]


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings.database_url)
    logger.info("SocialNest started (env=%s, blob_backend=%s)", settings.env_name, settings.blob_backend)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="SocialNest API",
        version="1.0.0",
        description=_DESCRIPTION,
        openapi_tags=_TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Attach rate limiter state before middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)

    # Middleware is applied in reverse-registration order (last added = outermost).
    # request_id wraps the error envelope so 500s also carry X-Request-ID;
    # CORS is outermost so every response carries CORS headers.
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(error_envelope_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.include_router(users_router, prefix="/api")
    # Literal /profiles/followers and /profiles/following must precede /profiles/{user_id}
    app.include_router(social_router, prefix="/api")
    app.include_router(profiles_router, prefix="/api")
    app.include_router(posts_router, prefix="/api")
    app.include_router(interactions_router, prefix="/api")

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="socialnest")

    return app


app = create_app()
