"""Error kinds raised by the credential registry.

Every failure is synchronous and terminal: the operation that raised it
made no state change, and nothing is retried internally.  The HTTP layer
maps each kind to one status code (app/api/dependencies.py).
"""

from __future__ import annotations


class RegistryError(Exception):
    pass


class PermissionDenied(RegistryError):
    """Caller lacks the role the operation requires."""


class InvalidArgument(RegistryError, ValueError):
    """Malformed or out-of-range input."""


class NotFound(RegistryError):
    """Identifier unknown to the credential store."""


class AlreadyExists(RegistryError):
    """Identifier collision on issuance."""


class AlreadyRevoked(RegistryError):
    """Credential was already revoked."""
