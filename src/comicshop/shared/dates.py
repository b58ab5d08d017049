"""Calendar dates encoded as 8-digit ``YYYYMMDD`` integers.

Ship dates reuse the same field for two sentinels that are not dates at all:
``NOT_SHIPPED`` (0) while an order waits for shipment and ``NOT_APPLICABLE``
(-1) for in-store sales that never ship. Anything displaying or comparing a
ship date has to check ``is_sentinel`` first.
"""

from datetime import date

NOT_SHIPPED = 0
NOT_APPLICABLE = -1

_SENTINEL_LABELS = {
    NOT_SHIPPED: "Not yet shipped",
    NOT_APPLICABLE: "In-store purchase",
}


def to_yyyymmdd(value: date) -> int:
    return value.year * 10000 + value.month * 100 + value.day


def from_yyyymmdd(value: int) -> date:
    """Decode an integer date; sentinels and malformed values raise ``ValueError``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Date must be an integer in YYYYMMDD form, got {value!r}")
    if is_sentinel(value):
        raise ValueError(f"{value} is a ship-date sentinel, not a calendar date")
    if not 10000101 <= value <= 99991231:
        raise ValueError(f"Date must have 8 digits (YYYYMMDD), got {value}")

    year, rest = divmod(value, 10000)
    month, day = divmod(rest, 100)
    return date(year, month, day)


def validate_yyyymmdd(value: int) -> int:
    from_yyyymmdd(value)
    return value


def today() -> int:
    return to_yyyymmdd(date.today())


def is_sentinel(value: int) -> bool:
    return value in _SENTINEL_LABELS


def describe_ship_date(value: int) -> str:
    """Render a ship-date field for display, special-casing the sentinels."""
    if is_sentinel(value):
        return _SENTINEL_LABELS[value]
    return from_yyyymmdd(value).isoformat()
