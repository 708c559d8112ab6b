# tests/test_models.py

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from core.domain.models import ConversionRequest, TaskRequest, validate_input
from core.errors import InputValidationError


@pytest.mark.parametrize(
    ("source", "target", "rate_min", "rate_max", "amount", "message"),
    [
        ("USD", "USD", 1, 2, 100, "cannot be the same"),
        ("USD", "EUR", 2, 1, 100, "less than maximum"),
        ("USD", "EUR", 1, 2, -100, "positive number"),
        ("USD", "EUR", 1, 2, 0, "positive number"),
        ("USD", "EUR", 0, 2, 100, "Rates must be positive"),
        ("USD", "EUR", 1, -2, 100, "less than maximum"),
        ("USD", "EUR", math.nan, 2, 100, "finite"),
        ("USD", "EUR", 1, math.nan, 100, "finite"),
        ("USD", "EUR", 1, 2, math.nan, "finite"),
        ("USD", "EUR", 1, math.inf, 100, "finite"),
        ("USD", "EUR", 1, 2, math.inf, "finite"),
        ("USD", "EUR", -math.inf, 2, 100, "finite"),
    ],
)
def test_validate_input_rejects(source, target, rate_min, rate_max, amount, message) -> None:
    with pytest.raises(InputValidationError, match=message):
        validate_input(source, target, rate_min, rate_max, amount)


def test_validate_input_accepts_valid_request() -> None:
    assert validate_input("USD", "EUR", 1, 2, 100) is None


def test_create_normalizes_currency_codes() -> None:
    req = ConversionRequest.create(
        source_currency=" usd",
        target_currency="eur ",
        amount=100,
        rate_min=0.8,
        rate_max=0.9,
    )
    assert req.source_currency == "USD"
    assert req.target_currency == "EUR"


def test_create_compares_codes_case_insensitively() -> None:
    with pytest.raises(InputValidationError):
        ConversionRequest.create(
            source_currency="usd",
            target_currency="USD",
            amount=100,
            rate_min=0.8,
            rate_max=0.9,
        )


def test_create_rejects_blank_currency() -> None:
    with pytest.raises(InputValidationError):
        ConversionRequest.create(
            source_currency="  ",
            target_currency="EUR",
            amount=100,
            rate_min=0.8,
            rate_max=0.9,
        )


def test_program_arguments_order_and_format() -> None:
    req = ConversionRequest.create(
        source_currency="USD",
        target_currency="EUR",
        amount=100,
        rate_min=0.85,
        rate_max=0.9,
    )
    assert req.program_arguments == "0.85 0.9 100"


def test_request_is_immutable() -> None:
    req = ConversionRequest.create(
        source_currency="USD",
        target_currency="EUR",
        amount=100,
        rate_min=0.85,
        rate_max=0.9,
    )
    with pytest.raises(ValidationError):
        req.amount = 5  # type: ignore[misc]


def test_task_request_wire_format() -> None:
    body = TaskRequest.for_source("int main() { return 0; }", "0.85 0.9 100").model_dump(by_alias=True)
    assert body == {
        "Type": "SourceCode",
        "SourceCode": {
            "Object": "SourceCode",
            "Code": "int main() { return 0; }",
            "Arguments": "0.85 0.9 100",
            "Language": "C",
        },
    }
