"""
Display helpers for rupee amounts, matching the en-IN number format used by
the frontend: 1234567.5 -> ₹12,34,567.5
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CURRENCY_SYMBOL = "₹"

Number = Union[Decimal, float, int]


def _group_indian(digits: str) -> str:
    # Last three digits form one group, everything before is grouped in pairs.
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: Number) -> str:
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{abs(value):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    text = _group_indian(integer_part)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{CURRENCY_SYMBOL}{sign}{text}"


def format_percentage(value: float) -> str:
    return f"{abs(value):.1f}%"
