"""Read-only feed of registry notifications, oldest first.

Indexers and UIs poll this instead of subscribing in-process. A poller keeps
the last `seq` it saw, passes it back as `after`, and bounds each page with
`limit`.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from app.api.state import get_registry
from app.services.registry_service import CredentialRegistry

router = APIRouter(prefix="/v1/events", tags=["events"])

MAX_PAGE = 1000


class EventOut(BaseModel):
    seq: int
    name: str
    payload: dict[str, object]


@router.get("", response_model=list[EventOut])
def list_events(
    registry: Annotated[CredentialRegistry, Depends(get_registry)],
    name: Annotated[str | None, Query()] = None,
    after: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int | None, Query(ge=1, le=MAX_PAGE)] = None,
) -> list[EventOut]:
    return [
        EventOut(seq=seq, name=event.name, payload=event.payload())
        for seq, event in registry.events.history(name, after=after, limit=limit)
    ]
