"""
Input validators for IBAN generation.

Why this file exists
--------------------
The checksum and formatting stages are total functions: they never fail on
well-formed input. Everything that *can* go wrong with user input is caught
here, before any checksum work, and reported as a value rather than raised.

Design principles
-----------------
- **Pure functions**: no side effects, the candidate is never trimmed or
  sanitized so the UI can show exactly what the user typed.
- **Ordered checks**: empty, then non-digit, then too long. The first failing
  check wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import Registry

MAX_ACCOUNT_DIGITS = 16


class FailureKind(str, Enum):
    EMPTY_ACCOUNT_NUMBER = "EmptyAccountNumber"
    NON_DIGIT_ACCOUNT_NUMBER = "NonDigitAccountNumber"
    ACCOUNT_NUMBER_TOO_LONG = "AccountNumberTooLong"
    NO_BANK_SELECTED = "NoBankSelected"


_MESSAGES = {
    FailureKind.EMPTY_ACCOUNT_NUMBER: "Account number is required.",
    FailureKind.NON_DIGIT_ACCOUNT_NUMBER: "Account number must contain only digits.",
    FailureKind.ACCOUNT_NUMBER_TOO_LONG: f"Account number cannot exceed {MAX_ACCOUNT_DIGITS} digits.",
    FailureKind.NO_BANK_SELECTED: "Please select a bank.",
}


@dataclass(frozen=True)
class ValidationFailure:
    """
    Why an input was rejected.

    Attributes:
        kind:    Machine-readable failure kind.
        message: User-facing text, shown verbatim by the CLI and web API.
    """
    kind: FailureKind
    message: str

    @classmethod
    def of(cls, kind: FailureKind) -> "ValidationFailure":
        return cls(kind=kind, message=_MESSAGES[kind])


def _ascii_digits(s: str) -> bool:
    # str.isdigit() also accepts superscripts and other Unicode digits.
    return all("0" <= ch <= "9" for ch in s)


def validate_account_number(
    candidate: Optional[str], max_digits: int = MAX_ACCOUNT_DIGITS
) -> Optional[ValidationFailure]:
    """
    Validate a raw account-number candidate.

    Args:
        candidate:  Text as typed by the user (may be None).
        max_digits: Longest accepted account number.

    Returns:
        None when the candidate is acceptable, otherwise the first failure.
    """
    if not candidate:
        return ValidationFailure.of(FailureKind.EMPTY_ACCOUNT_NUMBER)
    if not _ascii_digits(candidate):
        return ValidationFailure.of(FailureKind.NON_DIGIT_ACCOUNT_NUMBER)
    if len(candidate) > max_digits:
        if max_digits == MAX_ACCOUNT_DIGITS:
            return ValidationFailure.of(FailureKind.ACCOUNT_NUMBER_TOO_LONG)
        return ValidationFailure(
            kind=FailureKind.ACCOUNT_NUMBER_TOO_LONG,
            message=f"Account number cannot exceed {max_digits} digits.",
        )
    return None


def validate_bank_code(code: Optional[str], registry: Registry) -> Optional[ValidationFailure]:
    """A bank counts as selected only if its code is in the registry."""
    if registry.get(code) is None:
        return ValidationFailure.of(FailureKind.NO_BANK_SELECTED)
    return None


def normalize_spaces(s: str) -> str:
    """
    Remove all whitespace from a string.

    Used on formatted IBANs ("PK29 HABB ...") before verification and when the
    compact form is copied.
    """
    return "".join(s.split())
