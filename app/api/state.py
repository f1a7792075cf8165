"""Process-wide registry instance for the HTTP layer.

Routers never import the instance directly; they receive it through the
``get_registry`` dependency, which tests replace via
``app.dependency_overrides``.
"""

from __future__ import annotations

from app.core.config import SETTINGS
from app.core.metrics import count_event
from app.services.registry_service import CredentialRegistry


def build_registry(administrator: str, **kwargs) -> CredentialRegistry:
    registry = CredentialRegistry(administrator, **kwargs)
    registry.events.subscribe(count_event)
    return registry


_registry = build_registry(SETTINGS.registry_admin)


def get_registry() -> CredentialRegistry:
    return _registry
