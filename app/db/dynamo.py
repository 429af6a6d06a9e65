import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from app.core.config import settings
from app.models.expense import Expense, ExpenseCreate

logger = logging.getLogger(__name__)

# Initialize DynamoDB resource
dynamodb = boto3.resource(
    "dynamodb",
    region_name=settings.DYNAMO_REGION,
    endpoint_url=settings.DYNAMO_ENDPOINT_URL,
)

# Single shared family ledger, partition key "expense_id"
expenses_table = dynamodb.Table(settings.DYNAMO_EXPENSES_TABLE)


class StoreError(Exception):
    """Raised when the remote expense store rejects or fails a request."""


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Message", str(exc))
    return str(exc)


def list_expenses() -> List[Expense]:
    """
    Fetch every expense, newest first by creation time.
    Follows the scan's LastEvaluatedKey so the full table is returned.
    """
    items: List[Dict[str, Any]] = []
    scan_kwargs: Dict[str, Any] = {}
    try:
        while True:
            response = expenses_table.scan(**scan_kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key
    except (ClientError, BotoCoreError) as e:
        logger.error(f"list_expenses failed: {_error_message(e)}")
        raise StoreError("Error loading expenses") from e

    expenses = []
    for item in items:
        try:
            expenses.append(_from_dynamo(item))
        except (KeyError, ValidationError) as e:
            logger.warning(f"Skipping malformed expense {item.get('expense_id')}: {e}")

    expenses.sort(key=lambda exp: exp.created_at, reverse=True)
    return expenses


def put_expense(expense: ExpenseCreate) -> Expense:
    """Insert a new expense. The store assigns the id and creation timestamp."""
    stored = Expense(
        id=uuid4().hex,
        created_at=datetime.now(timezone.utc),
        **expense.model_dump(),
    )
    try:
        expenses_table.put_item(
            Item=_to_item(stored),
            ConditionExpression="attribute_not_exists(expense_id)",
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"put_expense failed: {_error_message(e)}")
        raise StoreError("Error adding expense") from e

    logger.info(f"Stored expense {stored.id} ({stored.category.value}, {stored.amount})")
    return stored


def delete_expense(expense_id: str) -> bool:
    """Delete a specific expense item. Returns False when it did not exist."""
    try:
        response = expenses_table.delete_item(
            Key={"expense_id": expense_id},
            ReturnValues="ALL_OLD",
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"delete_expense failed: {_error_message(e)}")
        raise StoreError("Error deleting expense") from e
    return "Attributes" in response


def ping() -> Dict[str, Any]:
    """Cheap connectivity probe for the status endpoint."""
    try:
        expenses_table.scan(Limit=1)
        return {
            "connected": True,
            "table": settings.DYNAMO_EXPENSES_TABLE,
            "region": settings.DYNAMO_REGION,
            "error": None,
        }
    except (ClientError, BotoCoreError) as e:
        logger.error(f"DynamoDB check failed: {_error_message(e)}")
        return {
            "connected": False,
            "table": settings.DYNAMO_EXPENSES_TABLE,
            "region": settings.DYNAMO_REGION,
            "error": _error_message(e),
        }


def _to_item(expense: Expense) -> Dict[str, Any]:
    return {
        "expense_id": expense.id,
        "description": expense.description,
        "amount": expense.amount,
        "category": expense.category.value,
        "date": expense.date.isoformat(),
        "created_at": expense.created_at.isoformat(),
    }


def _from_dynamo(item: Dict[str, Any]) -> Expense:
    """Parse a raw table item. Malformed dates or amounts fail here, not in the analyzer."""
    return Expense(
        id=item["expense_id"],
        description=item["description"],
        amount=item["amount"],
        category=item["category"],
        date=item["date"],
        created_at=item["created_at"],
    )
