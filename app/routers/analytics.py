"""
Analytics Router
Aggregate views recomputed from the full expense list on every request
"""
from datetime import datetime

from fastapi import APIRouter

from app.core.config import settings
from app.routers.expenses import load_expenses
from app.utils.analyzer import AnalyticsSummary, ExpenseAnalyzer
from app.utils.formatting import format_currency, format_percentage

router = APIRouter()
expense_analyzer = ExpenseAnalyzer(settings.MONTHLY_BREAKDOWN_MONTHS)


def _current_summary() -> AnalyticsSummary:
    return expense_analyzer.summarize(load_expenses(), datetime.now())


def _change_direction(change: float) -> str:
    if change > 0:
        return "up"
    if change < 0:
        return "down"
    return "flat"


@router.get("/summary")
def get_summary():
    """
    Overview metrics: totals, this month vs last month, daily average and top category.
    """
    summary = _current_summary()
    top = summary.top_category

    return {
        "total_amount": summary.total_amount,
        "total_display": format_currency(summary.total_amount),
        "transaction_count": summary.transaction_count,
        "this_month_total": summary.this_month_total,
        "this_month_display": format_currency(summary.this_month_total),
        "this_month_count": summary.this_month_count,
        "last_month_total": summary.last_month_total,
        "monthly_change": summary.monthly_change,
        "monthly_change_display": format_percentage(summary.monthly_change),
        "monthly_change_direction": _change_direction(summary.monthly_change),
        "daily_average": summary.daily_average,
        "daily_average_display": format_currency(summary.daily_average),
        "days_tracked": summary.days_tracked,
        "top_category": top.to_dict() if top else None,
    }


@router.get("/categories")
def get_category_breakdown():
    summary = _current_summary()
    return {
        "total_amount": summary.total_amount,
        "categories": [
            {**item.to_dict(), "amount_display": format_currency(item.amount)}
            for item in summary.categories
        ],
    }


@router.get("/monthly")
def get_monthly_breakdown():
    summary = _current_summary()
    return {
        "months": [
            {**item.to_dict(), "total_display": format_currency(item.total)}
            for item in summary.months
        ],
    }
