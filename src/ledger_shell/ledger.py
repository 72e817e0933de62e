# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
User data model: accounts, transactions, categories and money.

These are plain containers. The only invariants are unique account names
and unique category ids.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True, order=True)
class Money:
    """An amount of USD stored as a whole number of cents."""

    cents: int = 0

    @classmethod
    def from_float(cls, value: float) -> Money:
        """Build from a dollar amount such as 199.99 (rounded to cents)."""
        cents = Decimal(str(value)) * 100
        return cls(int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents + other.cents)

    def __radd__(self, other: object) -> Money:
        # Lets sum() start from its integer 0
        if other == 0:
            return self
        return NotImplemented

    def __str__(self) -> str:
        sign = "-" if self.cents < 0 else ""
        dollars, cents = divmod(abs(self.cents), 100)
        return f"{sign}${dollars}.{cents:02d}"


@dataclass
class Transaction:
    amount: Money
    time: datetime
    description: str
    category: str | None = None


@dataclass
class Account:
    name: str
    transactions: list[Transaction] = field(default_factory=list)

    def add_transaction(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)

    def total(self) -> Money:
        return sum((t.amount for t in self.transactions), Money())


class TransactionCategories:
    """Set of transaction category ids, kept in creation order."""

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: dict[str, None] = {}
        for category_id in ids:
            self.create_category(category_id)

    def create_category(self, category_id: str) -> None:
        if category_id in self._ids:
            raise ValueError(f"Category {category_id} already exists")
        self._ids[category_id] = None

    def get_category(self, category_id: str) -> str | None:
        return category_id if category_id in self._ids else None

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)


class Ledger:
    """The user's whole financial state."""

    def __init__(
        self,
        accounts: Iterable[Account] = (),
        categories: TransactionCategories | None = None,
    ) -> None:
        self._accounts: list[Account] = []
        for account in accounts:
            self._add_account(account)
        self.categories = (
            categories if categories is not None else TransactionCategories()
        )

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts)

    def _add_account(self, account: Account) -> None:
        if self.get_account_by_name(account.name) is not None:
            raise ValueError(f"Account '{account.name}' already exists")
        self._accounts.append(account)

    def add_new_account(self, name: str) -> Account:
        account = Account(name)
        self._add_account(account)
        return account

    def get_account_by_name(self, name: str) -> Account | None:
        for account in self._accounts:
            if account.name == name:
                return account
        return None

    def replace_with(self, other: Ledger) -> None:
        """Take over the contents of ``other`` in place."""
        self._accounts, self.categories = other._accounts, other.categories
