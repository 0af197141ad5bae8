"""Conversion between loans and the persisted JSON document.

Records are stored with camelCase keys so documents written by the web
version of the tracker load unchanged.
"""

import json
import logging
from dataclasses import fields
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from loan_tracker.engine.coercion import to_amount, to_months
from loan_tracker.models.loan import Loan, Payment

logger = logging.getLogger(__name__)

LOAN_KEYS = {
    "loan_id": "id",
    "name": "name",
    "total_amount": "totalAmount",
    "tenure_months": "tenureMonths",
    "monthly_emi": "monthlyEmi",
    "start_month": "startMonth",
    "created_at": "createdAt",
    "completed_at": "completedAt",
    "payments": "payments",
}

PAYMENT_KEYS = {
    "payment_id": "id",
    "amount": "amount",
    "date": "date",
    "note": "note",
    "created_at": "createdAt",
}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def payment_to_dict(payment: Payment) -> dict:
    """Convert a payment to its stored form."""
    return {PAYMENT_KEYS[f.name]: serialize_value(getattr(payment, f.name)) for f in fields(payment)}


def loan_to_dict(loan: Loan) -> dict:
    """Convert a loan and its payments to the stored form.

    ``completedAt`` is omitted until the loan has been stamped.
    """
    result = {}
    for f in fields(loan):
        value = getattr(loan, f.name)
        if f.name == "payments":
            result[LOAN_KEYS[f.name]] = [payment_to_dict(p) for p in value]
        elif f.name == "completed_at" and value is None:
            continue
        elif f.name == "start_month":
            result[LOAN_KEYS[f.name]] = value or ""
        else:
            result[LOAN_KEYS[f.name]] = serialize_value(value)
    return result


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp, returning None when it is unusable."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    # JavaScript's toISOString() uses a trailing Z
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def payment_from_dict(data: dict) -> Payment:
    """Rebuild a payment, coercing bad numbers to zero."""
    return Payment(
        payment_id=_text(data.get("id")),
        amount=to_amount(data.get("amount")),
        date=_text(data.get("date")),
        note=_text(data.get("note")),
        created_at=parse_timestamp(data.get("createdAt")),
    )


def loan_from_dict(data: dict) -> Loan:
    """Rebuild a loan, tolerating fields from older document versions."""
    raw_payments = data.get("payments")
    if not isinstance(raw_payments, list):
        raw_payments = []

    return Loan(
        loan_id=_text(data.get("id")),
        name=_text(data.get("name")),
        total_amount=to_amount(data.get("totalAmount")),
        tenure_months=to_months(data.get("tenureMonths")),
        monthly_emi=to_amount(data.get("monthlyEmi")),
        start_month=_text(data.get("startMonth")) or None,
        created_at=parse_timestamp(data.get("createdAt")),
        completed_at=parse_timestamp(data.get("completedAt")),
        payments=tuple(payment_from_dict(p) for p in raw_payments if isinstance(p, dict)),
    )


def encode_loans(loans: Iterable[Loan], pretty: bool = False) -> str:
    """Serialize the whole collection to a JSON document."""
    data = [loan_to_dict(loan) for loan in loans]
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def decode_loans(blob: str | bytes | None) -> tuple[Loan, ...]:
    """Deserialize a JSON document into loans.

    Missing, malformed or non-list documents yield an empty tuple.
    """
    if not blob:
        return ()
    try:
        data = json.loads(blob)
    except (ValueError, RecursionError) as e:
        logger.warning("Discarding corrupt loan document: %s", e)
        return ()

    if not isinstance(data, list):
        logger.warning("Discarding loan document: expected a list, got %s", type(data).__name__)
        return ()

    loans = tuple(loan_from_dict(item) for item in data if isinstance(item, dict))
    skipped = len(data) - len(loans)
    if skipped:
        logger.warning("Skipped %d loan entries that were not objects", skipped)
    return loans
