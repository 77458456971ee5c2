"""IBAN construction core: validation, checksum and formatting."""

from .builder import (
    GenerationResult,
    IBANBuilder,
    assemble_bban,
    compact_iban,
    format_iban,
    generate_iban,
)
from .checksum import compute_check_digits, is_valid_iban, mod97, transliterate
from .validators import FailureKind, ValidationFailure, validate_account_number, validate_bank_code

__all__ = [
    "GenerationResult",
    "IBANBuilder",
    "assemble_bban",
    "compact_iban",
    "format_iban",
    "generate_iban",
    "compute_check_digits",
    "is_valid_iban",
    "mod97",
    "transliterate",
    "FailureKind",
    "ValidationFailure",
    "validate_account_number",
    "validate_bank_code",
]
