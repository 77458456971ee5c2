"""
IBAN construction: validate → assemble BBAN → check digits → format.

Every stage is a pure function. `generate_iban` chains them and returns a
`GenerationResult`; validation failures short-circuit the chain and are
returned, not raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..config import Bank, Registry
from .checksum import compute_check_digits
from .validators import (
    MAX_ACCOUNT_DIGITS,
    ValidationFailure,
    normalize_spaces,
    validate_account_number,
    validate_bank_code,
)

COUNTRY_CODE = "PK"
GROUP_SIZE = 4


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation call: an IBAN or the first validation failure."""
    iban: Optional[str] = None
    formatted: Optional[str] = None
    bank: Optional[Bank] = None
    error: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def assemble_bban(bank_code: str, account_number: str, width: int = MAX_ACCOUNT_DIGITS) -> str:
    """Bank code followed by the account number left-padded with '0' (never truncated)."""
    return bank_code + account_number.rjust(width, "0")


def format_iban(iban: str) -> str:
    """Group into 4-character chunks separated by single spaces."""
    return " ".join(iban[i : i + GROUP_SIZE] for i in range(0, len(iban), GROUP_SIZE))


def compact_iban(text: str) -> str:
    """Formatted IBAN back to its electronic form (no whitespace)."""
    return normalize_spaces(text)


def build_iban(bban: str, country_code: str = COUNTRY_CODE) -> str:
    return country_code + compute_check_digits(bban, country_code) + bban


def generate_iban(
    account_number: Optional[str],
    bank_code: Optional[str],
    registry: Registry,
    country_code: str = COUNTRY_CODE,
    max_digits: int = MAX_ACCOUNT_DIGITS,
) -> GenerationResult:
    """
    Build a formatted IBAN from raw UI inputs.

    Account-number errors are reported before bank-selection errors.

    Args:
        account_number: Raw account-number text.
        bank_code:      Selected bank identifier (None/"" when nothing is selected).
        registry:       Banks that may be selected.

    Returns:
        GenerationResult with `iban`/`formatted` set, or with `error` set.
    """
    failure = validate_account_number(account_number, max_digits)
    if failure is None:
        failure = validate_bank_code(bank_code, registry)
    if failure is not None:
        return GenerationResult(error=failure)

    bank = registry.get(bank_code)
    bban = assemble_bban(bank.code, account_number, max_digits)
    iban = build_iban(bban, country_code)
    return GenerationResult(iban=iban, formatted=format_iban(iban), bank=bank)


class IBANBuilder:
    """
    Stateless IBAN generator bound to an injected bank registry.

    Lets callers (CLI, web, tests) swap in a synthetic registry without
    touching the packaged bank table.
    """

    def __init__(
        self,
        registry: Registry,
        country_code: str = COUNTRY_CODE,
        max_digits: int = MAX_ACCOUNT_DIGITS,
    ) -> None:
        self.registry = registry
        self.country_code = country_code
        self.max_digits = max_digits

    @classmethod
    def from_config(cls, cfg) -> "IBANBuilder":
        return cls(
            registry=cfg.registry,
            country_code=cfg.generator.country_code,
            max_digits=cfg.generator.account_length,
        )

    @property
    def banks(self) -> List[Bank]:
        return list(self.registry.banks)

    def validate(self, account_number: Optional[str]) -> Optional[ValidationFailure]:
        return validate_account_number(account_number, self.max_digits)

    def generate(self, account_number: Optional[str], bank_code: Optional[str]) -> GenerationResult:
        return generate_iban(
            account_number,
            bank_code,
            self.registry,
            country_code=self.country_code,
            max_digits=self.max_digits,
        )
