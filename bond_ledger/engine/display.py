"""Rounding for presentation. Engine values stay unrounded floats."""

from decimal import Decimal, ROUND_HALF_UP

from bond_ledger.models.schedule import ScheduleRow

TWO_PLACES = Decimal("0.01")
SIX_PLACES = Decimal("0.000001")

MONEY_FIELDS = (
    "opening_balance",
    "interest",
    "amortization",
    "installment",
    "closing_balance",
    "investor_flow",
    "issuer_flow",
)


def money(value: float | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(TWO_PLACES, ROUND_HALF_UP)


def percent(value: float | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(SIX_PLACES, ROUND_HALF_UP)


def row_for_display(row: ScheduleRow) -> dict:
    record = row.as_record()
    for name in MONEY_FIELDS:
        record[name] = money(record[name])
    record["tea"] = percent(record["tea"])
    record["tep"] = percent(record["tep"])
    return record
