from datetime import date
from decimal import Decimal

import pytest

from src.hr_portal.hr_portal.common.formatting import format_date_id, format_idr
from src.hr_portal.hr_portal.common.validators import parse_amount
from src.hr_portal.hr_portal.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "amount,expected",
    [(5300000, "Rp 5.300.000"), (Decimal("999.6"), "Rp 1.000"), (0, "Rp 0"), (None, "Rp 0"), (-1500, "-Rp 1.500")],
)
def test_format_idr(amount, expected):
    assert format_idr(amount) == expected


def test_format_date_id_has_no_padding():
    assert format_date_id(date(2026, 1, 5)) == "5/1/2026"
    assert format_date_id(date(2026, 12, 25)) == "25/12/2026"


def test_parse_amount():
    assert parse_amount("", "Bonus") == Decimal("0")
    assert parse_amount(" 1500.50 ", "Bonus") == Decimal("1500.50")
    for bad in ("x", "Infinity", "-1"):
        with pytest.raises(ValidationError):
            parse_amount(bad, "Bonus")
