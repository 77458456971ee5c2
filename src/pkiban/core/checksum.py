"""
ISO 7064 MOD 97-10 check digits, as used by IBANs (ISO 13616).

Steps for computing check digits:
  1) Append the country code and a "00" placeholder to the BBAN.
  2) Replace letters A..Z with 10..35.
  3) Reduce the resulting decimal string modulo 97, one digit at a time.
  4) Check value = (98 - remainder) % 97, with 0 mapped to 97.

The numeric string is 30+ digits for a Pakistani IBAN, so it is never parsed
as a single integer.
"""

from __future__ import annotations

import string
from typing import Dict

from .validators import normalize_spaces

# A=10, B=11, ..., Z=35
_LETTER_CODES: Dict[str, str] = {ch: str(i) for i, ch in enumerate(string.ascii_uppercase, start=10)}


def transliterate(value: str) -> str:
    """Replace every letter with its two-digit code; digits pass through unchanged."""
    return "".join(_LETTER_CODES.get(ch, ch) for ch in value.upper())


def mod97(digits: str) -> int:
    """
    Remainder of a decimal string of any length modulo 97.

    Raises:
        ValueError: if the string contains a non-digit character.
    """
    remainder = 0
    for ch in digits:
        if not "0" <= ch <= "9":
            raise ValueError(f"not a decimal digit: {ch!r}")
        remainder = (remainder * 10 + (ord(ch) - 48)) % 97
    return remainder


def _check_value(remainder: int) -> int:
    value = (98 - remainder) % 97
    # Raw 0 (remainder 1) becomes 97. Remainder 0 yields 1, which is kept as "01".
    return 97 if value == 0 else value


def compute_check_digits(bban: str, country_code: str = "PK") -> str:
    """
    Compute the two IBAN check digits for a BBAN.

    Args:
        bban:         Alphanumeric basic bank account number.
        country_code: ISO 3166-1 alpha-2 country code.

    Returns:
        Two decimal digits, zero-padded (e.g. "02").
    """
    check_string = bban + country_code + "00"
    remainder = mod97(transliterate(check_string))
    return f"{_check_value(remainder):02d}"


def is_valid_iban(iban: str) -> bool:
    """
    Validate an IBAN using the ISO 13616 mod-97 check.

    Spaces are ignored. The first four characters are moved to the end, letters
    are transliterated and a valid IBAN leaves remainder 1.
    """
    s = normalize_spaces(iban).upper()
    if len(s) < 5 or not s.isascii() or not s.isalnum():
        return False
    if not (s[:2].isalpha() and s[2:4].isdigit()):
        return False
    return mod97(transliterate(s[4:] + s[:4])) == 1
