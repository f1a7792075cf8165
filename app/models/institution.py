from __future__ import annotations

from dataclasses import dataclass

# Principals are opaque strings; blank means "no one".
NULL_PRINCIPAL = ""


def is_null_principal(principal: str) -> bool:
    return not principal.strip()


@dataclass(frozen=True, slots=True)
class InstitutionInfo:
    is_authorized: bool = False
    name: str = ""
