"""Domain models for sb_account: pure dataclasses, no storage dependency."""

from dataclasses import dataclass


@dataclass
class Account:
    username: str
    password_hash: str
    balance: int


def apply_balance_delta(balance: int, amount: int) -> int:
    """Add a signed delta to a balance, never going below zero."""
    return max(balance + amount, 0)
