"""Issuing-institution management.

Authorizing and deauthorizing are administrator-only; looking an
institution up is public and never 404s (unknown principals read as
not authorized, with an empty name).

Principals are opaque strings and may contain slashes (DIDs such as
`did:web:uni.example/registrar`), so the path parameter uses the
`path` converter.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.api.dependencies import require_user, to_http_exception
from app.api.state import get_registry
from app.models.principal import Principal
from app.services.errors import RegistryError
from app.services.registry_service import CredentialRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/institutions", tags=["institutions"])


class InstitutionAuthorizeIn(BaseModel):
    institution: str
    name: str


class InstitutionOut(BaseModel):
    institution: str
    authorized: bool
    name: str


@router.post("", response_model=InstitutionOut, status_code=status.HTTP_201_CREATED)
def authorize_institution(
    body: InstitutionAuthorizeIn,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> InstitutionOut:
    try:
        registry.authorize_institution(principal.user_id, body.institution, body.name)
    except RegistryError as e:
        raise to_http_exception(e) from None
    return InstitutionOut(institution=body.institution, authorized=True, name=body.name)


@router.delete("/{institution:path}", status_code=status.HTTP_204_NO_CONTENT)
def deauthorize_institution(
    institution: str,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> None:
    try:
        registry.deauthorize_institution(principal.user_id, institution)
    except RegistryError as e:
        raise to_http_exception(e) from None


@router.get("/{institution:path}", response_model=InstitutionOut)
def get_institution_info(
    institution: str,
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> InstitutionOut:
    info = registry.get_institution_info(institution)
    return InstitutionOut(
        institution=institution, authorized=info.is_authorized, name=info.name
    )
