# PUBLIC_INTERFACE
"""
Principal session endpoints.

Principals authenticate with the hosted auth provider; this API only
remembers which principal the browser belongs to.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from ...identity.cookie_store import IdentityStore
from ..deps import current_principal_id, principal_store_dep
from ..models import Envelope, PrincipalSessionRequest

router = APIRouter(prefix="/api/principals", tags=["principals"])


@router.post("/session", summary="Start principal session", response_model=Envelope)
def start_session(body: PrincipalSessionRequest, response: Response, store: IdentityStore = Depends(principal_store_dep)):
    store.persist_identity(response, body.principal_id)
    return Envelope(data={"principal_id": body.principal_id})


@router.delete("/session", summary="End principal session", response_model=Envelope)
def end_session(response: Response, store: IdentityStore = Depends(principal_store_dep)):
    store.forget_identity(response)
    return Envelope(data={"redirect_to": store.login_url})


@router.get("/me", summary="Current principal", response_model=Envelope)
def me(principal_id: str = Depends(current_principal_id)):
    return Envelope(data={"principal_id": principal_id})
