from __future__ import annotations

import calendar
import math
from collections import defaultdict
from dataclasses import dataclass, asdict, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.models.expense import Expense

ZERO = Decimal("0")
SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class CategoryBreakdown:
    """Total spend, share of the grand total and entry count for one category."""

    category: str
    amount: Decimal
    percentage: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MonthlyBreakdown:
    year_month: str
    display_name: str
    total: Decimal
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AnalyticsSummary:
    total_amount: Decimal
    transaction_count: int
    this_month_total: Decimal
    this_month_count: int
    last_month_total: Decimal
    monthly_change: float
    daily_average: Decimal
    days_tracked: int
    categories: List[CategoryBreakdown] = field(default_factory=list)
    months: List[MonthlyBreakdown] = field(default_factory=list)

    @property
    def top_category(self) -> Optional[CategoryBreakdown]:
        return self.categories[0] if self.categories else None


def total_amount(expenses: Sequence[Expense]) -> Decimal:
    return sum((exp.amount for exp in expenses), ZERO)


def month_expenses(expenses: Sequence[Expense], year: int, month: int) -> List[Expense]:
    """Expenses whose expense date (not creation time) falls in year/month."""
    return [exp for exp in expenses if exp.date.year == year and exp.date.month == month]


def month_total(expenses: Sequence[Expense], year: int, month: int) -> Decimal:
    return total_amount(month_expenses(expenses, year, month))


def previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def month_over_month_change(current: Decimal, previous: Decimal) -> float:
    # A zero baseline reports no change instead of an infinite one.
    if previous == 0:
        return 0.0
    return float((current - previous) / previous * 100)


def category_breakdown(expenses: Sequence[Expense]) -> List[CategoryBreakdown]:
    """
    Group expenses by category, largest total first.
    Equal totals are ordered alphabetically by category label.
    """
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: Dict[str, int] = defaultdict(int)
    for exp in expenses:
        totals[exp.category.value] += exp.amount
        counts[exp.category.value] += 1

    grand_total = total_amount(expenses)
    breakdown = [
        CategoryBreakdown(
            category=category,
            amount=amount,
            percentage=float(amount / grand_total * 100) if grand_total > 0 else 0.0,
            count=counts[category],
        )
        for category, amount in totals.items()
    ]
    breakdown.sort(key=lambda item: item.category)
    breakdown.sort(key=lambda item: item.amount, reverse=True)
    return breakdown


def oldest_date(expenses: Sequence[Expense]) -> Optional[date]:
    if not expenses:
        return None
    return min(exp.date for exp in expenses)


def days_tracked(expenses: Sequence[Expense], now: datetime) -> int:
    """
    Whole days, rounded up, from midnight of the oldest expense date until now.
    Never less than 1.
    """
    oldest = oldest_date(expenses)
    if oldest is None:
        return 1
    start = datetime.combine(oldest, time.min, tzinfo=now.tzinfo)
    elapsed = (now - start).total_seconds() / SECONDS_PER_DAY
    return max(1, math.ceil(elapsed))


def daily_average(expenses: Sequence[Expense], now: datetime) -> Decimal:
    return total_amount(expenses) / days_tracked(expenses, now)


def monthly_breakdown(expenses: Sequence[Expense], limit: int = 6) -> List[MonthlyBreakdown]:
    groups: Dict[str, MonthlyBreakdown] = {}
    for exp in expenses:
        key = f"{exp.date.year}-{exp.date.month:02d}"
        if key not in groups:
            groups[key] = MonthlyBreakdown(
                year_month=key,
                display_name=f"{calendar.month_name[exp.date.month]} {exp.date.year}",
                total=ZERO,
                count=0,
            )
        groups[key].total += exp.amount
        groups[key].count += 1

    ordered = sorted(groups.values(), key=lambda item: item.year_month, reverse=True)
    return ordered[:limit]


class ExpenseAnalyzer:
    """
    Builds the aggregate view shown on the overview, analytics, categories
    and monthly pages. Stateless apart from the breakdown window, so one
    instance is shared by every request.
    """

    def __init__(self, monthly_breakdown_months: int = 6) -> None:
        self._monthly_breakdown_months = monthly_breakdown_months

    def summarize(self, expenses: Sequence[Expense], now: datetime) -> AnalyticsSummary:
        today = now.date()
        last_year, last_month = previous_month(today.year, today.month)

        this_month = month_expenses(expenses, today.year, today.month)
        this_month_total = total_amount(this_month)
        last_month_total = month_total(expenses, last_year, last_month)

        return AnalyticsSummary(
            total_amount=total_amount(expenses),
            transaction_count=len(expenses),
            this_month_total=this_month_total,
            this_month_count=len(this_month),
            last_month_total=last_month_total,
            monthly_change=month_over_month_change(this_month_total, last_month_total),
            daily_average=daily_average(expenses, now),
            days_tracked=days_tracked(expenses, now),
            categories=category_breakdown(expenses),
            months=monthly_breakdown(expenses, self._monthly_breakdown_months),
        )
