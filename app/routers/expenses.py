import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from app.core.config import settings
from app.db import dynamo
from app.models.expense import Expense, ExpenseCreate, ExpensePublic
from app.utils.formatting import format_currency

router = APIRouter()
logger = logging.getLogger(__name__)


def to_public(expense: Expense) -> ExpensePublic:
    data = expense.model_dump()
    data["amount"] = float(expense.amount)
    return ExpensePublic(amount_display=format_currency(expense.amount), **data)


def load_expenses() -> List[Expense]:
    """Fetch the full list, turning store failures into a 503 for the client."""
    try:
        return dynamo.list_expenses()
    except dynamo.StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{e}. Please try again.",
        )


@router.get("/", response_model=List[ExpensePublic])
def list_expenses():
    return [to_public(exp) for exp in load_expenses()]


@router.get("/recent", response_model=List[ExpensePublic])
def list_recent_expenses():
    expenses = load_expenses()[: settings.RECENT_EXPENSES_LIMIT]
    return [to_public(exp) for exp in expenses]


@router.post("/", response_model=ExpensePublic, status_code=status.HTTP_201_CREATED)
def create_expense(expense: ExpenseCreate):
    try:
        stored = dynamo.put_expense(expense)
    except dynamo.StoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    logger.info(f"Expense added: {stored.description!r} {format_currency(stored.amount)}")
    return to_public(stored)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: str):
    try:
        deleted = dynamo.delete_expense(expense_id)
    except dynamo.StoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=404, detail="Expense not found")
    logger.info(f"Expense deleted: {expense_id}")
    return None
