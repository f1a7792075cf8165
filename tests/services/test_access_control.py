from __future__ import annotations

import pytest

from app.models.credential import Credential
from app.models.events import (
    AdministratorTransferred,
    InstitutionAuthorized,
    InstitutionDeauthorized,
)
from app.services.access_control import AccessControl, AuthzDecision
from app.services.errors import InvalidArgument, PermissionDenied

ADMIN = "admin"
UNI = "uni-1"


@pytest.fixture
def access() -> AccessControl:
    return AccessControl(ADMIN)


def _record(issuer: str) -> Credential:
    return Credential(
        id="0x01",
        student_name="Jane Doe",
        institution_name="Beta College",
        degree="BSc",
        field_of_study="CS",
        graduation_year=2023,
        document_ref="doc123",
        issuer=issuer,
        issued_at=1,
    )


# ---- construction ----


def test_initial_administrator(access: AccessControl) -> None:
    assert access.administrator == ADMIN
    assert access.is_administrator(ADMIN)
    assert not access.is_administrator(UNI)


def test_null_administrator_rejected() -> None:
    with pytest.raises(InvalidArgument):
        AccessControl("  ")


# ---- decisions ----


def test_decision_allow_and_deny() -> None:
    assert AuthzDecision.allow().allowed is True
    denied = AuthzDecision.deny("nope")
    assert denied.allowed is False
    with pytest.raises(PermissionDenied, match="nope"):
        denied.require()
    AuthzDecision.allow().require()


def test_check_issuer_reports_reason(access: AccessControl) -> None:
    decision = access.check_issuer(UNI)
    assert decision.allowed is False
    assert "authorized institution" in decision.reason

    access.authorize(ADMIN, UNI, "Beta College")
    assert access.check_issuer(UNI).allowed is True


@pytest.mark.parametrize(
    "caller,allowed",
    [(UNI, True), (ADMIN, True), ("uni-2", False), ("", False)],
)
def test_check_revoker(access: AccessControl, caller: str, allowed: bool) -> None:
    assert access.check_revoker(caller, _record(UNI)).allowed is allowed


# ---- authorize ----


def test_authorize_sets_flag_and_name(access: AccessControl) -> None:
    event = access.authorize(ADMIN, UNI, "Beta College")

    assert event == InstitutionAuthorized(
        institution=UNI, institution_name="Beta College"
    )
    info = access.institution_info(UNI)
    assert info.is_authorized is True
    assert info.name == "Beta College"


def test_authorize_requires_admin(access: AccessControl) -> None:
    with pytest.raises(PermissionDenied):
        access.authorize(UNI, UNI, "Self Appointed")
    assert access.is_authorized_issuer(UNI) is False


@pytest.mark.parametrize(
    "institution,name",
    [("", "Beta College"), ("   ", "Beta College"), (UNI, ""), (UNI, "  ")],
)
def test_authorize_rejects_bad_arguments(
    access: AccessControl, institution: str, name: str
) -> None:
    with pytest.raises(InvalidArgument):
        access.authorize(ADMIN, institution, name)


def test_authorize_rejects_already_authorized(access: AccessControl) -> None:
    access.authorize(ADMIN, UNI, "Beta College")
    with pytest.raises(InvalidArgument, match="already authorized"):
        access.authorize(ADMIN, UNI, "Beta College Renamed")
    assert access.display_name(UNI) == "Beta College"


# ---- deauthorize ----


def test_deauthorize_clears_flag_and_name(access: AccessControl) -> None:
    access.authorize(ADMIN, UNI, "Beta College")
    event = access.deauthorize(ADMIN, UNI)

    assert event == InstitutionDeauthorized(institution=UNI)
    info = access.institution_info(UNI)
    assert info.is_authorized is False
    assert info.name == ""


def test_deauthorize_requires_admin(access: AccessControl) -> None:
    access.authorize(ADMIN, UNI, "Beta College")
    with pytest.raises(PermissionDenied):
        access.deauthorize(UNI, UNI)
    assert access.is_authorized_issuer(UNI) is True


def test_deauthorize_unknown_rejected(access: AccessControl) -> None:
    with pytest.raises(InvalidArgument, match="not authorized"):
        access.deauthorize(ADMIN, UNI)


def test_reauthorize_takes_fresh_name(access: AccessControl) -> None:
    access.authorize(ADMIN, UNI, "Beta College")
    access.deauthorize(ADMIN, UNI)
    access.authorize(ADMIN, UNI, "Beta University")
    assert access.institution_info(UNI).name == "Beta University"


# ---- transfer ----


def test_transfer_administrator(access: AccessControl) -> None:
    event = access.transfer_administrator(ADMIN, "admin-2")

    assert event == AdministratorTransferred(previous=ADMIN, current="admin-2")
    assert access.administrator == "admin-2"
    assert not access.is_administrator(ADMIN)


def test_transfer_requires_admin(access: AccessControl) -> None:
    with pytest.raises(PermissionDenied):
        access.transfer_administrator(UNI, UNI)
    assert access.administrator == ADMIN


def test_transfer_rejects_null_identity(access: AccessControl) -> None:
    with pytest.raises(InvalidArgument):
        access.transfer_administrator(ADMIN, "")
    assert access.administrator == ADMIN


def test_old_admin_cannot_authorize_after_transfer(access: AccessControl) -> None:
    access.transfer_administrator(ADMIN, "admin-2")
    with pytest.raises(PermissionDenied):
        access.authorize(ADMIN, UNI, "Beta College")
    access.authorize("admin-2", UNI, "Beta College")
