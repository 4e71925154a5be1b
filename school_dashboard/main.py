# PUBLIC_INTERFACE
"""
FastAPI application factory for the School Dashboard backend.

create_app() builds every app-wide handle once (token codec, identity
stores, directory) and stores them on app.state. A missing identity
pass-phrase raises IdentityConfigError here, before any request is served.
"""
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.deps import request_id_of
from .api.routes import health, principals, students, teachers
from .core.errors import DirectoryError, ErrorCode, ErrorResponse
from .core.logging import error, info
from .core.settings import Settings, get_settings
from .identity.cookie_store import identity_stores
from .repositories.directory import Directory, build_directory
from .security.codecs import build_codec


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, directory: Optional[Directory] = None) -> FastAPI:
    """Build the API with explicit settings and directory, or from the environment."""
    settings = settings or get_settings()
    codec = build_codec(settings)

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Backend for the school dashboard: teacher and principal sessions carried in identity cookies, "
            "and teacher-scoped student listings."
        ),
        version="0.1.0",
        openapi_tags=[
            {"name": "health", "description": "Health and readiness endpoints"},
            {"name": "root", "description": "Root information"},
            {"name": "teachers", "description": "Teacher login, logout and profile"},
            {"name": "principals", "description": "Principal session cookie"},
            {"name": "students", "description": "Students registered by the signed-in teacher"},
        ],
    )
    app.state.settings = settings
    app.state.identity_stores = identity_stores(settings, codec)
    app.state.directory = directory if directory is not None else build_directory(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )

    @app.middleware("http")
    async def _request_context(request: Request, call_next):
        # Reuse the caller's id so frontend and backend logs line up.
        request_id = request.headers.get(settings.request_id_header) or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[settings.request_id_header] = request_id
        return response

    @app.exception_handler(DirectoryError)
    async def _directory_error(request: Request, exc: DirectoryError) -> JSONResponse:
        error("Directory error", request_id=request_id_of(request), path=request.url.path, upstream_status=exc.status_code)
        body = ErrorResponse(code=ErrorCode.UPSTREAM_ERROR, message="School directory is unavailable.")
        return JSONResponse(status_code=502, content={"detail": body.model_dump(exclude_none=True)})

    @app.on_event("startup")
    async def _on_startup() -> None:
        info(
            "School Dashboard backend started",
            environment=settings.environment,
            token_scheme=codec.scheme,
            secure_cookies=settings.cookie_secure,
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        await app.state.directory.aclose()

    app.include_router(health.router)
    app.include_router(teachers.router)
    app.include_router(principals.router)
    app.include_router(students.router)
    return app
