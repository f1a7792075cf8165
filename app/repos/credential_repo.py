from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from app.models.credential import Credential
from app.services.errors import AlreadyExists, InvalidArgument, NotFound

# A stored timestamp of zero means "no record".
ABSENT_TIMESTAMP = 0


class CredentialRepo(Protocol):
    def exists(self, credential_id: str) -> bool: ...
    def get(self, credential_id: str) -> Credential: ...
    def insert(self, record: Credential) -> None: ...
    def set_validity(self, credential_id: str, is_valid: bool) -> Credential: ...
    def __len__(self) -> int: ...


class InMemoryCredentialRepo:
    def __init__(self) -> None:
        self._store: dict[str, Credential] = {}

    def exists(self, credential_id: str) -> bool:
        record = self._store.get(credential_id)
        return record is not None and record.issued_at != ABSENT_TIMESTAMP

    def get(self, credential_id: str) -> Credential:
        if not self.exists(credential_id):
            raise NotFound(f"credential {credential_id} not found")
        return self._store[credential_id]

    def insert(self, record: Credential) -> None:
        if record.issued_at == ABSENT_TIMESTAMP:
            raise InvalidArgument("issued_at must be non-zero")
        if self.exists(record.id):
            raise AlreadyExists(f"credential {record.id} already exists")
        self._store[record.id] = record

    def set_validity(self, credential_id: str, is_valid: bool) -> Credential:
        if is_valid:
            raise InvalidArgument("a credential cannot be re-activated")
        updated = replace(self.get(credential_id), is_valid=False)
        self._store[credential_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._store)
