"""Pydantic schemas for the balance endpoints."""

from pydantic import BaseModel, Field

# Keeps balance + amount well inside a BIGINT column
MAX_AMOUNT = 10**15


class UpdateBalanceRequest(BaseModel):
    amount: int = Field(
        ...,
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="Signed delta; negative amounts debit",
    )


class BalanceResponse(BaseModel):
    balance: int
