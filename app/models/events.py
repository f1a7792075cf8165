"""Notifications emitted by the registry after a successful mutation.

Events carry audit data only.  Observers (UIs, indexers, the metrics
subscriber) receive them synchronously from the EventBus.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class RegistryEvent:
    name: ClassVar[str] = "RegistryEvent"

    def payload(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CredentialIssued(RegistryEvent):
    name: ClassVar[str] = "CredentialIssued"

    id: str
    student_name: str
    institution_name: str
    degree: str
    issuer: str


@dataclass(frozen=True, slots=True)
class CredentialRevoked(RegistryEvent):
    name: ClassVar[str] = "CredentialRevoked"

    id: str
    revoker: str


@dataclass(frozen=True, slots=True)
class InstitutionAuthorized(RegistryEvent):
    name: ClassVar[str] = "InstitutionAuthorized"

    institution: str
    institution_name: str


@dataclass(frozen=True, slots=True)
class InstitutionDeauthorized(RegistryEvent):
    name: ClassVar[str] = "InstitutionDeauthorized"

    institution: str


@dataclass(frozen=True, slots=True)
class AdministratorTransferred(RegistryEvent):
    name: ClassVar[str] = "AdministratorTransferred"

    previous: str
    current: str
