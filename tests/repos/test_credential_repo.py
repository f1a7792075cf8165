from __future__ import annotations

from dataclasses import replace

import pytest

from app.models.credential import Credential
from app.repos.credential_repo import InMemoryCredentialRepo
from app.services.errors import AlreadyExists, InvalidArgument, NotFound


def _record(credential_id: str = "0x01", issued_at: int = 1_700_000_000) -> Credential:
    return Credential(
        id=credential_id,
        student_name="Jane Doe",
        institution_name="Beta College",
        degree="BSc",
        field_of_study="CS",
        graduation_year=2023,
        document_ref="doc123",
        issuer="issuer-beta",
        issued_at=issued_at,
    )


@pytest.fixture
def repo() -> InMemoryCredentialRepo:
    return InMemoryCredentialRepo()


def test_insert_and_get(repo: InMemoryCredentialRepo) -> None:
    record = _record()
    repo.insert(record)
    assert repo.exists("0x01") is True
    assert repo.get("0x01") == record
    assert len(repo) == 1


def test_get_missing_raises_not_found(repo: InMemoryCredentialRepo) -> None:
    assert repo.exists("0x01") is False
    with pytest.raises(NotFound):
        repo.get("0x01")


def test_insert_duplicate_raises(repo: InMemoryCredentialRepo) -> None:
    repo.insert(_record())
    with pytest.raises(AlreadyExists):
        repo.insert(replace(_record(), student_name="Someone Else"))
    assert repo.get("0x01").student_name == "Jane Doe"


def test_insert_zero_timestamp_rejected(repo: InMemoryCredentialRepo) -> None:
    with pytest.raises(InvalidArgument):
        repo.insert(_record(issued_at=0))
    assert repo.exists("0x01") is False


def test_set_validity_false_flips_only_the_flag(repo: InMemoryCredentialRepo) -> None:
    original = _record()
    repo.insert(original)

    updated = repo.set_validity("0x01", False)

    assert updated.is_valid is False
    assert replace(updated, is_valid=True) == original
    assert repo.get("0x01").is_valid is False


def test_set_validity_true_rejected(repo: InMemoryCredentialRepo) -> None:
    repo.insert(_record())
    repo.set_validity("0x01", False)
    with pytest.raises(InvalidArgument, match="re-activated"):
        repo.set_validity("0x01", True)
    assert repo.get("0x01").is_valid is False


def test_set_validity_missing_raises_not_found(repo: InMemoryCredentialRepo) -> None:
    with pytest.raises(NotFound):
        repo.set_validity("0x01", False)


def test_records_are_immutable(repo: InMemoryCredentialRepo) -> None:
    repo.insert(_record())
    with pytest.raises(AttributeError):
        repo.get("0x01").student_name = "Mallory"  # type: ignore[misc]
