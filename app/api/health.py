"""Liveness and readiness endpoints.

/health: the process answers; includes the registry's record count.
/ready:  can take traffic.  The registry is in-process, so this is
         always 200 once the app has started.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.api.state import get_registry
from app.services.registry_service import CredentialRegistry

router = APIRouter(tags=["health"])


@router.get("/health")
def health(
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
) -> dict:
    return {
        "status": "ok",
        "checks": {"registry": "ok"},
        "credentials": registry.credential_count,
    }


@router.get("/ready")
async def ready() -> Response:
    return Response(status_code=200)
