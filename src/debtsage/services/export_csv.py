"""CSV export helpers for schedules and payment history."""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from ..models.payment import DebtPayment
from .amortization import ScheduleEntry

SCHEDULE_HEADERS = ["month", "payment", "monthly_interest", "principal", "balance"]
PAYMENT_HEADERS = [
    "id",
    "debt_id",
    "amount",
    "payment_date",
    "principal_amount",
    "interest_amount",
    "remaining_balance",
]

MONEY_FIELDS = frozenset(
    {
        "payment",
        "monthly_interest",
        "principal",
        "balance",
        "amount",
        "principal_amount",
        "interest_amount",
        "remaining_balance",
    }
)


def _serialize_value(value, *, money: bool = False):
    if value is None:
        return ""
    if money:
        return f"{float(value):.2f}"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def _write_rows(*, headers: list[str], rows: Iterable[object], output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=headers, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(
                {h: _serialize_value(getattr(row, h, None), money=h in MONEY_FIELDS) for h in headers}
            )

    return output_path


def export_schedule_csv(*, schedule: Iterable[ScheduleEntry], output_path: Path) -> Path:
    """Write a payoff schedule to CSV at `output_path`.

    Money columns are rounded to cents; returns the path written.
    """

    return _write_rows(headers=SCHEDULE_HEADERS, rows=schedule, output_path=output_path)


def export_payments_csv(*, payments: Iterable[DebtPayment], output_path: Path) -> Path:
    """Write recorded payments to CSV at `output_path`."""

    return _write_rows(headers=PAYMENT_HEADERS, rows=payments, output_path=output_path)
