from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller, taken from the ``sub`` claim of a validated JWT.

    The registry decides what the caller may do (administrator, authorized
    institution, or neither) by looking ``user_id`` up in its own state;
    the token carries no roles.
    """

    user_id: str
