from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

from app.db import dynamo
from app.main import app
from app.models.expense import Expense


class FakeExpenseStore:
    """In-memory stand-in for the DynamoDB expenses table."""

    def __init__(self):
        self.items = {}
        self.fail = False
        self._ids = count(1)

    def _check(self, message):
        if self.fail:
            raise dynamo.StoreError(message)

    def list_expenses(self):
        self._check("Error loading expenses")
        return sorted(self.items.values(), key=lambda exp: exp.created_at, reverse=True)

    def put_expense(self, expense):
        self._check("Error adding expense")
        n = next(self._ids)
        stored = Expense(
            id=f"exp-{n}",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=n),
            **expense.model_dump(),
        )
        self.items[stored.id] = stored
        return stored

    def delete_expense(self, expense_id):
        self._check("Error deleting expense")
        return self.items.pop(expense_id, None) is not None

    def ping(self):
        return {"connected": not self.fail, "table": "test", "region": "test", "error": None}


@pytest.fixture
def store(monkeypatch):
    fake = FakeExpenseStore()
    monkeypatch.setattr(dynamo, "list_expenses", fake.list_expenses)
    monkeypatch.setattr(dynamo, "put_expense", fake.put_expense)
    monkeypatch.setattr(dynamo, "delete_expense", fake.delete_expense)
    monkeypatch.setattr(dynamo, "ping", fake.ping)
    return fake


@pytest.fixture
def client(store):
    return TestClient(app)
