"""Shared fixtures for ledger tests."""

from datetime import datetime
from decimal import Decimal
import itertools

import pytest

from src.domain.constants import TransactionType
from src.domain.models import Counterparty, Transaction


@pytest.fixture
def make_transaction():
    """Return a factory building stored transactions with sensible defaults."""
    ids = itertools.count(1)

    def _make(
        type=TransactionType.BORROWED,
        amount="100",
        counterparty_id="friend-1",
        date=datetime(2024, 1, 15),
        **kwargs,
    ) -> Transaction:
        return Transaction(
            id=kwargs.pop("id", f"tx-{next(ids)}"),
            owner_user_id=kwargs.pop("owner_user_id", "user-1"),
            counterparty_id=counterparty_id,
            amount=Decimal(str(amount)),
            description=kwargs.pop("description", "test"),
            date=date,
            type=TransactionType(type),
            **kwargs,
        )

    return _make


@pytest.fixture
def friends() -> list[Counterparty]:
    return [
        Counterparty(id="friend-1", name="Ayşe", owner_user_id="user-1"),
        Counterparty(id="friend-2", name="Mehmet", owner_user_id="user-1"),
    ]
