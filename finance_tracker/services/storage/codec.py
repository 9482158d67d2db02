"""
Transaction Row Codec

The hosted ``transactions`` table has no ``person`` column. The counterpart
of a borrow/lend is therefore packed into the ``note`` column behind a
reserved separator and unpacked again on read.

    in memory:  {"note": "lunch", "person": "Alice"}
    persisted:  {"note": "lunch || P:Alice"}

Known limitation: a note that itself contains the separator is split on
decode and its tail is read back as the person.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

PERSON_SEPARATOR = " || P:"


def coerce_amount(value: Any) -> Decimal:
    """Numeric form of a stored or submitted amount; ``NaN`` if unparseable."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        return Decimal("NaN")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("NaN")


def encode(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Shape an in-memory payload (full record or partial update) for storage."""
    row = dict(payload)

    person = row.pop("person", None)
    if person:
        row["note"] = (row.get("note") or "") + PERSON_SEPARATOR + person

    if row.get("amount") is not None:
        row["amount"] = coerce_amount(row["amount"])

    return row


def decode(row: Mapping[str, Any]) -> dict[str, Any]:
    """Shape a stored row back into the in-memory payload."""
    local = dict(row)

    note = local.get("note")
    if note and PERSON_SEPARATOR in note:
        parts = note.split(PERSON_SEPARATOR)
        local["person"] = parts.pop()
        local["note"] = PERSON_SEPARATOR.join(parts)

    local["amount"] = coerce_amount(local.get("amount"))
    return local
