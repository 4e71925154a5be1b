# PUBLIC_INTERFACE
"""
FastAPI dependencies: injected app-wide handles and the recovered identity.
"""
from __future__ import annotations

from fastapi import Request

from ..core.errors import ErrorCode, http_error
from ..core.logging import info
from ..identity.cookie_store import ROLE_PRINCIPAL, ROLE_TEACHER, IdentityStore
from ..repositories.directory import Directory


# PUBLIC_INTERFACE
def directory_dep(request: Request) -> Directory:
    """Directory handle built once at application start."""
    return request.app.state.directory


# PUBLIC_INTERFACE
def request_id_of(request: Request) -> str | None:
    """Correlation id assigned by the request-context middleware."""
    return getattr(request.state, "request_id", None)


def _store(request: Request, role: str) -> IdentityStore:
    return request.app.state.identity_stores[role]


# PUBLIC_INTERFACE
def teacher_store_dep(request: Request) -> IdentityStore:
    return _store(request, ROLE_TEACHER)


# PUBLIC_INTERFACE
def principal_store_dep(request: Request) -> IdentityStore:
    return _store(request, ROLE_PRINCIPAL)


def _require_identity(request: Request, role: str) -> str:
    store = _store(request, role)
    identifier = store.recover_identity(request.cookies)
    if identifier is None:
        info("No identity recovered", request_id=request_id_of(request), role=role, path=request.url.path)
        raise http_error(401, ErrorCode.AUTH_REQUIRED, "Please sign in again.", login_url=store.login_url)
    return identifier


# PUBLIC_INTERFACE
def current_teacher_id(request: Request) -> str:
    """Recover the teacher ID from its cookie or reject with 401 AUTH_REQUIRED."""
    return _require_identity(request, ROLE_TEACHER)


# PUBLIC_INTERFACE
def current_principal_id(request: Request) -> str:
    """Recover the principal ID from its cookie or reject with 401 AUTH_REQUIRED."""
    return _require_identity(request, ROLE_PRINCIPAL)
