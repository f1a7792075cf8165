"""Credential registry: issuance, verification and revocation.

Per-credential lifecycle:

    Absent --issue--> Active --revoke--> Revoked (terminal)

``CredentialRegistry`` owns the access-control state and the credential
store and is the only thing that mutates either.  Every operation runs
under one lock, performs all of its checks before touching state, and
publishes its event only after the change is applied, so a failed call
leaves nothing behind.

The registry is an ordinary object; callers get it passed in.  The HTTP
layer builds one in app/api/state.py.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from app.core.metrics import REGISTRY_REJECTIONS
from app.models.credential import Credential, CredentialView
from app.models.events import CredentialIssued, CredentialRevoked
from app.models.institution import InstitutionInfo
from app.repos.credential_repo import CredentialRepo, InMemoryCredentialRepo
from app.services.access_control import AccessControl
from app.services.clock import Clock, SystemClock, approximate_year
from app.services.credential_id import identify
from app.services.errors import (
    AlreadyExists,
    AlreadyRevoked,
    InvalidArgument,
    RegistryError,
)
from app.services.event_bus import EventBus

logger = logging.getLogger(__name__)

MIN_GRADUATION_YEAR = 1900  # exclusive


class CredentialRegistry:
    def __init__(
        self,
        administrator: str,
        *,
        clock: Clock | None = None,
        repo: CredentialRepo | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._access = AccessControl(administrator)
        self._clock = clock if clock is not None else SystemClock()
        self._repo = repo if repo is not None else InMemoryCredentialRepo()
        self.events = events if events is not None else EventBus()
        self._lock = threading.RLock()

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except RegistryError as e:
                REGISTRY_REJECTIONS.labels(
                    operation=name, reason=type(e).__name__
                ).inc()
                raise

    # ------------------------------------------------------------------
    # Reads (public)
    # ------------------------------------------------------------------

    @property
    def administrator(self) -> str:
        with self._lock:
            return self._access.administrator

    @property
    def credential_count(self) -> int:
        with self._lock:
            return len(self._repo)

    def verify_credential(self, credential_id: str) -> CredentialView:
        with self._operation("verify_credential"):
            return self._repo.get(credential_id).view()

    def credential_exists(self, credential_id: str) -> bool:
        with self._lock:
            return self._repo.exists(credential_id)

    def get_institution_info(self, institution: str) -> InstitutionInfo:
        with self._lock:
            return self._access.institution_info(institution)

    # ------------------------------------------------------------------
    # Institution management (administrator)
    # ------------------------------------------------------------------

    def authorize_institution(self, caller: str, institution: str, name: str) -> None:
        with self._operation("authorize_institution"):
            event = self._access.authorize(caller, institution, name)
            self.events.publish(event)

    def deauthorize_institution(self, caller: str, institution: str) -> None:
        with self._operation("deauthorize_institution"):
            event = self._access.deauthorize(caller, institution)
            self.events.publish(event)

    def transfer_administrator(self, caller: str, new_admin: str) -> None:
        with self._operation("transfer_administrator"):
            event = self._access.transfer_administrator(caller, new_admin)
            self.events.publish(event)

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def issue_credential(
        self,
        caller: str,
        student_name: str,
        degree: str,
        field_of_study: str,
        graduation_year: int,
        document_ref: str,
    ) -> str:
        """Record a new credential issued by ``caller`` and return its id.

        Checks, in order: caller is an authorized institution; the four
        text fields are non-empty; ``1900 < graduation_year <= current
        year`` where the current year comes from ``approximate_year``.

        The id is derived from the fields, the caller and the clock
        reading, so issuing byte-identical content twice within the same
        second raises ``AlreadyExists``.  That collision is expected.
        """
        with self._operation("issue_credential"):
            decision = self._access.check_issuer(caller)
            if not decision.allowed:
                logger.warning("Access denied: user=%s action=issue", caller)
            decision.require()

            for label, value in (
                ("student_name", student_name),
                ("degree", degree),
                ("field_of_study", field_of_study),
                ("document_ref", document_ref),
            ):
                if not value.strip():
                    raise InvalidArgument(f"{label} must be non-empty")

            now = self._clock.now()
            if now == 0:
                raise InvalidArgument("clock reading of zero is not an issuance time")
            current_year = approximate_year(now)
            if not MIN_GRADUATION_YEAR < graduation_year <= current_year:
                raise InvalidArgument(
                    f"graduation_year must be > {MIN_GRADUATION_YEAR}"
                    f" and <= {current_year}"
                )

            credential_id = identify(
                student_name, degree, field_of_study, graduation_year, caller, now
            )
            if self._repo.exists(credential_id):
                logger.warning(
                    "Duplicate issuance rejected user=%s credential_id=%s",
                    caller,
                    credential_id,
                )
                raise AlreadyExists(f"credential {credential_id} already exists")

            record = Credential(
                id=credential_id,
                student_name=student_name,
                institution_name=self._access.display_name(caller),
                degree=degree,
                field_of_study=field_of_study,
                graduation_year=graduation_year,
                document_ref=document_ref,
                issuer=caller,
                issued_at=now,
            )
            self._repo.insert(record)
            logger.info(
                "Issued credential_id=%s issuer=%s",
                credential_id,
                caller,
                extra={"credential_id": credential_id},
            )
            self.events.publish(
                CredentialIssued(
                    id=credential_id,
                    student_name=student_name,
                    institution_name=record.institution_name,
                    degree=degree,
                    issuer=caller,
                )
            )
            return credential_id

    def revoke_credential(self, caller: str, credential_id: str) -> None:
        with self._operation("revoke_credential"):
            record = self._repo.get(credential_id)

            decision = self._access.check_revoker(caller, record)
            if not decision.allowed:
                logger.warning(
                    "Access denied: user=%s action=revoke credential_id=%s",
                    caller,
                    credential_id,
                )
            decision.require()

            if not record.is_valid:
                raise AlreadyRevoked(f"credential {credential_id} is already revoked")

            self._repo.set_validity(credential_id, False)
            logger.info(
                "Revoked credential_id=%s by=%s",
                credential_id,
                caller,
                extra={"credential_id": credential_id},
            )
            self.events.publish(CredentialRevoked(id=credential_id, revoker=caller))
