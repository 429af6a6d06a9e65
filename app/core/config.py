from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    PROJECT_NAME: str = "FamilyExpenseTracker"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # DynamoDB
    DYNAMO_REGION: str = Field(default="ap-south-1")
    DYNAMO_EXPENSES_TABLE: str = Field(
        default="family-expenses", validation_alias="DYNAMO_TABLE_EXPENSES"
    )
    DYNAMO_ENDPOINT_URL: Optional[str] = None  # e.g. http://localhost:8001 for DynamoDB Local

    # Expense rules
    MAX_EXPENSE_AMOUNT: int = 10_000_000  # 1 crore
    MAX_DESCRIPTION_LENGTH: int = 100
    RECENT_EXPENSES_LIMIT: int = 10
    MONTHLY_BREAKDOWN_MONTHS: int = 6

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


settings = Settings()
