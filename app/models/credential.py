from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Credential:
    """Issued academic credential as held by the store.

    Only ``is_valid`` ever changes after creation, and only from True to
    False.  ``issued_at`` is never zero for a stored record.
    """

    id: str
    student_name: str
    institution_name: str  # issuer's display name at issuance time
    degree: str
    field_of_study: str
    graduation_year: int
    document_ref: str  # opaque content hash, stored verbatim
    issuer: str
    issued_at: int
    is_valid: bool = True

    def view(self) -> CredentialView:
        return CredentialView(
            is_valid=self.is_valid,
            student_name=self.student_name,
            institution_name=self.institution_name,
            degree=self.degree,
            field_of_study=self.field_of_study,
            graduation_year=self.graduation_year,
            document_ref=self.document_ref,
        )


@dataclass(frozen=True, slots=True)
class CredentialView:
    """Public projection returned by verification."""

    is_valid: bool
    student_name: str
    institution_name: str
    degree: str
    field_of_study: str
    graduation_year: int
    document_ref: str
