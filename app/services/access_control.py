"""Identity & access for the credential registry.

Tracks the single administrator and the set of authorized issuing
institutions with their display names.  Permission checks return an
``AuthzDecision`` instead of raising, so callers (and tests) can inspect
why a principal was turned away; the mutating methods here turn a denial
into ``PermissionDenied`` themselves.

This class is not thread-safe on its own.  CredentialRegistry owns the
instance and serializes every call under its lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.models.credential import Credential
from app.models.events import (
    AdministratorTransferred,
    InstitutionAuthorized,
    InstitutionDeauthorized,
)
from app.models.institution import InstitutionInfo, is_null_principal
from app.services.errors import InvalidArgument, PermissionDenied

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthzDecision:
    allowed: bool
    reason: str = ""

    @staticmethod
    def allow() -> AuthzDecision:
        return AuthzDecision(allowed=True)

    @staticmethod
    def deny(reason: str) -> AuthzDecision:
        return AuthzDecision(allowed=False, reason=reason)

    def require(self) -> None:
        if not self.allowed:
            raise PermissionDenied(self.reason)


class AccessControl:
    def __init__(self, administrator: str) -> None:
        if is_null_principal(administrator):
            raise InvalidArgument("administrator must not be the null identity")
        self._administrator = administrator
        self._authorized: dict[str, bool] = {}
        self._names: dict[str, str] = {}

    @property
    def administrator(self) -> str:
        return self._administrator

    # ---- lookups ----

    def is_administrator(self, principal: str) -> bool:
        return principal == self._administrator

    def is_authorized_issuer(self, principal: str) -> bool:
        return self._authorized.get(principal, False)

    def display_name(self, principal: str) -> str:
        return self._names.get(principal, "")

    def institution_info(self, principal: str) -> InstitutionInfo:
        return InstitutionInfo(
            is_authorized=self.is_authorized_issuer(principal),
            name=self.display_name(principal),
        )

    # ---- decisions ----

    def check_administrator(self, caller: str) -> AuthzDecision:
        if self.is_administrator(caller):
            return AuthzDecision.allow()
        return AuthzDecision.deny("caller is not the administrator")

    def check_issuer(self, caller: str) -> AuthzDecision:
        if self.is_authorized_issuer(caller):
            return AuthzDecision.allow()
        return AuthzDecision.deny("caller is not an authorized institution")

    def check_revoker(self, caller: str, record: Credential) -> AuthzDecision:
        if caller == record.issuer or self.is_administrator(caller):
            return AuthzDecision.allow()
        return AuthzDecision.deny("only the issuer or the administrator can revoke")

    # ---- mutations ----

    def authorize(
        self, caller: str, institution: str, name: str
    ) -> InstitutionAuthorized:
        self._require_admin(caller, "authorize")

        if is_null_principal(institution):
            raise InvalidArgument("institution must not be the null identity")
        if not name.strip():
            raise InvalidArgument("institution name must be non-empty")
        if self.is_authorized_issuer(institution):
            logger.warning("Rejected re-authorization of institution=%s", institution)
            raise InvalidArgument("institution is already authorized")

        self._authorized[institution] = True
        self._names[institution] = name
        logger.info("Authorized institution=%s name=%r", institution, name)
        return InstitutionAuthorized(institution=institution, institution_name=name)

    def deauthorize(self, caller: str, institution: str) -> InstitutionDeauthorized:
        self._require_admin(caller, "deauthorize")

        if not self.is_authorized_issuer(institution):
            logger.warning(
                "Rejected deauthorization of unknown institution=%s", institution
            )
            raise InvalidArgument("institution is not authorized")

        # Drop the name too: re-authorization must supply a fresh one.
        self._authorized.pop(institution, None)
        self._names.pop(institution, None)
        logger.info("Deauthorized institution=%s", institution)
        return InstitutionDeauthorized(institution=institution)

    def transfer_administrator(
        self, caller: str, new_admin: str
    ) -> AdministratorTransferred:
        self._require_admin(caller, "transfer administrator")

        if is_null_principal(new_admin):
            raise InvalidArgument("new administrator must not be the null identity")

        previous = self._administrator
        self._administrator = new_admin
        logger.info("Administrator transferred from=%s to=%s", previous, new_admin)
        return AdministratorTransferred(previous=previous, current=new_admin)

    def _require_admin(self, caller: str, action: str) -> None:
        decision = self.check_administrator(caller)
        if not decision.allowed:
            logger.warning("Access denied: user=%s action=%s", caller, action)
        decision.require()
