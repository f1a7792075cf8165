from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import app` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.api.state import build_registry, get_registry  # noqa: E402
from app.main import app  # noqa: E402
from app.services import token_service  # noqa: E402
from app.services.clock import FixedClock  # noqa: E402
from app.services.registry_service import CredentialRegistry  # noqa: E402

ADMIN = "registry-admin"
ISSUER = "issuer-beta"
OTHER_ISSUER = "issuer-alpha"
OUTSIDER = "mallory"

# 2023-11-14T22:13:20Z; approximate_year() gives 2023.
NOW = 1_700_000_000


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def registry(clock: FixedClock) -> CredentialRegistry:
    """Fresh registry per test, administered by ADMIN."""
    return build_registry(ADMIN, clock=clock)


@pytest.fixture
def issuer_registry(registry: CredentialRegistry) -> CredentialRegistry:
    """Registry with ISSUER already authorized as "Beta College"."""
    registry.authorize_institution(ADMIN, ISSUER, "Beta College")
    return registry


@pytest.fixture
def client(registry: CredentialRegistry) -> Iterator[TestClient]:
    app.dependency_overrides[get_registry] = lambda: registry
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_registry, None)


def mint_token(username: str = "test-user") -> str:
    """Create a valid ES256 JWT for testing."""
    return token_service.create_access_token(sub=username)


def auth(username: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {mint_token(username)}"}


def issue(
    registry: CredentialRegistry,
    caller: str = ISSUER,
    *,
    student_name: str = "Jane Doe",
    degree: str = "BSc",
    field_of_study: str = "CS",
    graduation_year: int = 2023,
    document_ref: str = "doc123",
) -> str:
    return registry.issue_credential(
        caller, student_name, degree, field_of_study, graduation_year, document_ref
    )
