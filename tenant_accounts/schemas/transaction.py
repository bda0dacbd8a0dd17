"""Ledger transaction schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TransactionCreate(BaseModel):
    """Record a transaction in the caller's ledger."""

    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    description: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)


class TransactionResponse(BaseModel):
    """Transaction response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: Decimal
    description: str
    category: str | None
    created_at: datetime
