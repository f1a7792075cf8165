"""Deterministic credential identifiers.

An identifier is the SHA-256 of a versioned, length-prefixed encoding of
the credential's defining fields plus issuer and issuance time:

    b"credential-registry/id/v1"
    u32(len) student_name | u32(len) degree | u32(len) field_of_study
    i64 graduation_year
    u32(len) issuer
    i64 issued_at

Text is UTF-8; integers are big-endian.  The length prefixes mean no two
distinct tuples share an encoding ("ab" + "c" differs from "a" + "bc").
Identical inputs always give the same identifier, which is what lets the
store reject a byte-identical re-issuance in the same clock second.
"""

from __future__ import annotations

import hashlib
import struct

ID_DOMAIN = b"credential-registry/id/v1"


def _text(value: str) -> bytes:
    raw = value.encode("utf-8")
    return struct.pack(">I", len(raw)) + raw


def _int(value: int) -> bytes:
    return struct.pack(">q", value)


def encode_fields(
    student_name: str,
    degree: str,
    field_of_study: str,
    graduation_year: int,
    issuer: str,
    issued_at: int,
) -> bytes:
    return b"".join(
        (
            ID_DOMAIN,
            _text(student_name),
            _text(degree),
            _text(field_of_study),
            _int(graduation_year),
            _text(issuer),
            _int(issued_at),
        )
    )


def identify(
    student_name: str,
    degree: str,
    field_of_study: str,
    graduation_year: int,
    issuer: str,
    issued_at: int,
) -> str:
    """Return ``0x`` followed by 64 lowercase hex digits."""
    digest = hashlib.sha256(
        encode_fields(
            student_name, degree, field_of_study, graduation_year, issuer, issued_at
        )
    ).hexdigest()
    return "0x" + digest
