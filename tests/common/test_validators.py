from datetime import date

import pytest

from src.personnel_hub.personnel_hub.advances.schema import parse_advance
from src.personnel_hub.personnel_hub.common.datetime_utils import parse_iso_date
from src.personnel_hub.personnel_hub.common.validators import require_date, require_positive
from src.personnel_hub.personnel_hub.core.exceptions import ValidationError
from src.personnel_hub.personnel_hub.payments.schema import parse_payment
from src.personnel_hub.personnel_hub.payroll.schema import parse_payroll


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), "NaN", "inf"])
def test_require_positive_rejects_non_finite(value):
    with pytest.raises(ValidationError):
        require_positive(value, "Amount")


def test_advance_amount_nan_is_rejected():
    with pytest.raises(ValidationError):
        parse_advance({"amount": float("nan"), "reason": "rent"})


def test_payroll_gross_salary_infinity_is_rejected():
    with pytest.raises(ValidationError, match="finite"):
        parse_payroll({"period_month": "01", "period_year": "2025", "gross_salary": float("inf")})


def test_payment_amount_infinity_is_rejected():
    with pytest.raises(ValidationError):
        parse_payment({"amount": float("inf"), "payment_method": "cash"})


def test_parse_iso_date_accepts_timestamp_suffix():
    assert parse_iso_date("2025-03-04") == date(2025, 3, 4)
    assert parse_iso_date("2025-03-04T10:30:00Z") == date(2025, 3, 4)


@pytest.mark.parametrize("value", ["2099-01-01garbage", "2099-01-01 ", "2099-13-01"])
def test_require_date_rejects_trailing_or_invalid_text(value):
    with pytest.raises(ValidationError):
        require_date(value, "Start date")
