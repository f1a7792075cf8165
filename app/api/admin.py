from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.dependencies import require_user, to_http_exception
from app.api.state import get_registry
from app.models.principal import Principal
from app.services.errors import RegistryError
from app.services.registry_service import CredentialRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class AdministratorOut(BaseModel):
    administrator: str


class AdministratorTransferIn(BaseModel):
    new_administrator: str


@router.get("/administrator", response_model=AdministratorOut)
def get_administrator(
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> AdministratorOut:
    return AdministratorOut(administrator=registry.administrator)


@router.put("/administrator", response_model=AdministratorOut)
def transfer_administrator(
    body: AdministratorTransferIn,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> AdministratorOut:
    logger.info(
        "Administrator transfer requested by user=%s to=%s",
        principal.user_id,
        body.new_administrator,
    )
    try:
        registry.transfer_administrator(principal.user_id, body.new_administrator)
    except RegistryError as e:
        raise to_http_exception(e) from None
    return AdministratorOut(administrator=body.new_administrator)
