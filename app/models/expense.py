import datetime as dt
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.config import settings


class Category(str, Enum):
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    UTILITIES = "Utilities"
    ENTERTAINMENT = "Entertainment"
    HEALTHCARE = "Healthcare"
    SHOPPING = "Shopping"
    EDUCATION = "Education"
    OTHER = "Other"


class ExpenseCreate(BaseModel):
    description: str
    amount: Decimal = Field(gt=0, le=settings.MAX_EXPENSE_AMOUNT, max_digits=10, decimal_places=2)
    category: Category = Category.FOOD
    date: dt.date = Field(default_factory=dt.date.today)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter a description")
        if len(value) > settings.MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description must be at most {settings.MAX_DESCRIPTION_LENGTH} characters"
            )
        return value

    @field_validator("date")
    @classmethod
    def date_not_in_future(cls, value):
        if value > dt.date.today():
            raise ValueError("Expense date cannot be in the future")
        return value


class Expense(BaseModel):
    """A stored expense. Immutable: changes go through delete + create."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    description: str = Field(min_length=1, max_length=settings.MAX_DESCRIPTION_LENGTH)
    amount: Decimal = Field(gt=0, le=settings.MAX_EXPENSE_AMOUNT)
    category: Category
    date: dt.date
    created_at: dt.datetime


class ExpensePublic(BaseModel):
    id: str
    description: str
    amount: float
    amount_display: str
    category: Category
    date: dt.date
    created_at: dt.datetime
