"""Application wiring for the ticket tracker.

Importing the package builds the FastAPI instance: configuration is read,
tables are created and upgraded, middleware and routers are attached and the
error envelope handlers are registered. ``tracker.main`` adds logging, the
health probe and metrics on top.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import (
    TrackerError,
    http_exception_handler,
    tracker_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .db.migrate import run_migrations
from .db.session import Base, engine
from .middlewares import RequestContextMiddleware

# Importing the models registers their tables on ``Base.metadata``.
from .models import session as _session  # noqa: F401
from .models import ticket as _ticket  # noqa: F401
from .models import user as _user  # noqa: F401

app = FastAPI(title=settings.APP_NAME)

# Legacy databases are upgraded first so create_all only fills in what is
# still missing afterwards.
run_migrations(engine)
Base.metadata.create_all(bind=engine)

# ---------- Middleware ----------
app.add_middleware(RequestContextMiddleware)

if settings.ALLOWED_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# ---------- Routers ----------
from .routers import api_auth as api_auth_router  # noqa: E402

app.include_router(api_auth_router.router)

from .routers import api_tickets as api_tickets_router  # noqa: E402

app.include_router(api_tickets_router.router)

# ---------- Exception handling ----------
app.add_exception_handler(TrackerError, tracker_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["app"]
