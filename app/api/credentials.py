"""Credential issuance, verification and revocation endpoints.

- POST /v1/credentials                  — issue (authorized institution)
- GET  /v1/credentials/{id}/verify      — verify (public)
- POST /v1/credentials/{id}/revoke      — revoke (issuer or administrator)
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

router = APIRouter(prefix="/v1/credentials", tags=["credentials"])


class CredentialIssueIn(BaseModel):
    student_name: str
    degree: str
    field_of_study: str
    graduation_year: int
    document_ref: str


class CredentialIssueOut(BaseModel):
    id: str


class CredentialVerifyOut(BaseModel):
    id: str
    valid: bool
    student_name: str
    institution_name: str
    degree: str
    field_of_study: str
    graduation_year: int
    document_ref: str


class CredentialRevokeOut(BaseModel):
    id: str
    valid: bool


@router.post(
    "",
    response_model=CredentialIssueOut,
    status_code=status.HTTP_201_CREATED,
)
def issue_credential(
    body: CredentialIssueIn,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> CredentialIssueOut:
    try:
        credential_id = registry.issue_credential(
            principal.user_id,
            body.student_name,
            body.degree,
            body.field_of_study,
            body.graduation_year,
            body.document_ref,
        )
    except RegistryError as e:
        raise to_http_exception(e) from None
    return CredentialIssueOut(id=credential_id)


@router.get("/{credential_id}/verify", response_model=CredentialVerifyOut)
def verify_credential(
    credential_id: str,
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> CredentialVerifyOut:
    """Public: anyone holding an id can check it."""
    try:
        view = registry.verify_credential(credential_id)
    except RegistryError as e:
        raise to_http_exception(e) from None
    return CredentialVerifyOut(
        id=credential_id,
        valid=view.is_valid,
        student_name=view.student_name,
        institution_name=view.institution_name,
        degree=view.degree,
        field_of_study=view.field_of_study,
        graduation_year=view.graduation_year,
        document_ref=view.document_ref,
    )


@router.post("/{credential_id}/revoke", response_model=CredentialRevokeOut)
def revoke_credential(
    credential_id: str,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> CredentialRevokeOut:
    try:
        registry.revoke_credential(principal.user_id, credential_id)
    except RegistryError as e:
        raise to_http_exception(e) from None
    return CredentialRevokeOut(id=credential_id, valid=False)
