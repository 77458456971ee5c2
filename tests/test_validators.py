import pytest
from pkiban.config import Bank, Registry
from pkiban.core.validators import (
    FailureKind,
    normalize_spaces,
    validate_account_number,
    validate_bank_code,
)

@pytest.fixture
def registry():
    return Registry(banks=[Bank(name="Test Bank", code="TEST"), Bank(name="Other Bank", code="OTHR")])

def test_accepts_digits_up_to_16():
    assert validate_account_number("0") is None
    assert validate_account_number("1234567890123456") is None

@pytest.mark.parametrize("candidate", ["", None])
def test_empty(candidate):
    failure = validate_account_number(candidate)
    assert failure.kind == FailureKind.EMPTY_ACCOUNT_NUMBER
    assert failure.message == "Account number is required."

@pytest.mark.parametrize("candidate", ["12a4", " 123", "12-34", "１２３", "²"])
def test_non_digit(candidate):
    failure = validate_account_number(candidate)
    assert failure.kind == FailureKind.NON_DIGIT_ACCOUNT_NUMBER
    assert failure.message == "Account number must contain only digits."

def test_too_long():
    failure = validate_account_number("1" * 17)
    assert failure.kind == FailureKind.ACCOUNT_NUMBER_TOO_LONG
    assert failure.message == "Account number cannot exceed 16 digits."

def test_non_digit_checked_before_length():
    failure = validate_account_number("x" * 20)
    assert failure.kind == FailureKind.NON_DIGIT_ACCOUNT_NUMBER

def test_custom_max_digits():
    failure = validate_account_number("12345", max_digits=4)
    assert failure.kind == FailureKind.ACCOUNT_NUMBER_TOO_LONG
    assert failure.message == "Account number cannot exceed 4 digits."

def test_bank_code(registry):
    assert validate_bank_code("TEST", registry) is None
    assert validate_bank_code("test", registry) is None
    for code in ("", None, "HABB"):
        assert validate_bank_code(code, registry).kind == FailureKind.NO_BANK_SELECTED

def test_failure_kind_values_match_error_names():
    assert FailureKind.NO_BANK_SELECTED.value == "NoBankSelected"
    assert FailureKind.ACCOUNT_NUMBER_TOO_LONG.value == "AccountNumberTooLong"

def test_normalize_spaces():
    assert normalize_spaces("PK29 HABB\t0001\n2345") == "PK29HABB00012345"
