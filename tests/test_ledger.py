"""
Test suite for ledger module

Tests balance derivation, deposits, withdrawals, date filtering and the
demo seeding. CRITICAL: a rejected withdrawal must never touch the statement.
"""

import pytest
from decimal import Decimal
from datetime import date, datetime, timedelta, timezone

from finapi.accounts import Account, AccountStore, EntryType, StatementEntry
from finapi.exceptions import InsufficientFundsError, InvalidInputError, MissingInputError
from finapi.ledger import (
    SEED_SENTINEL, SIMULATED_ENTRIES,
    compute_balance, filter_by_date, parse_statement_date,
    record_deposit, record_withdraw, seed_simulated_entries, simulate
)


def local_noon(day: date) -> datetime:
    """Aware datetime at local noon on the given day"""
    return datetime(day.year, day.month, day.day, 12, 0).astimezone()


@pytest.fixture
def account():
    return Account(cpf="111", name="Ana")


class TestComputeBalance:
    """Test balance derivation from the statement"""

    def test_empty_statement(self):
        assert compute_balance([]) == Decimal("0")

    def test_credits_minus_debits(self):
        now = datetime.now(timezone.utc)
        statement = [
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("100"), created_at=now),
            StatementEntry(type=EntryType.DEBIT, amount=Decimal("30.50"), created_at=now),
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("0.25"), created_at=now),
        ]

        assert compute_balance(statement) == Decimal("69.75")

    def test_order_independent(self):
        now = datetime.now(timezone.utc)
        statement = [
            StatementEntry(type=EntryType.DEBIT, amount=Decimal("12"), created_at=now),
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("50"), created_at=now),
            StatementEntry(type=EntryType.DEBIT, amount=Decimal("8"), created_at=now),
        ]

        assert compute_balance(statement) == compute_balance(list(reversed(statement)))
        assert compute_balance(statement) == Decimal("30")


class TestDeposit:
    """Test deposit recording"""

    def test_deposit_appends_credit(self, account):
        before = datetime.now(timezone.utc)
        entry = record_deposit(account, "Pix", 100)

        assert account.statement == [entry]
        assert entry.type == EntryType.CREDIT
        assert entry.amount == Decimal("100")
        assert entry.description == "Pix"
        assert entry.created_at >= before
        assert compute_balance(account.statement) == Decimal("100")

    def test_duplicate_deposits_both_recorded(self, account):
        record_deposit(account, "Pix", Decimal("10"))
        record_deposit(account, "Pix", Decimal("10"))

        assert len(account.statement) == 2
        assert compute_balance(account.statement) == Decimal("20")

    def test_deposit_without_description(self, account):
        entry = record_deposit(account, None, "5.50")

        assert entry.description is None
        assert entry.amount == Decimal("5.50")

    def test_negative_deposit_rejected(self, account):
        with pytest.raises(InvalidInputError):
            record_deposit(account, "Refund", Decimal("-1"))
        assert account.statement == []

    def test_non_numeric_deposit_rejected(self, account):
        with pytest.raises(InvalidInputError):
            record_deposit(account, "Oops", "abc")
        assert account.statement == []


class TestWithdraw:
    """Test withdrawal recording"""

    def test_withdraw_appends_debit(self, account):
        record_deposit(account, "Pix", Decimal("100"))
        entry = record_withdraw(account, Decimal("40"))

        assert entry.type == EntryType.DEBIT
        assert entry.description is None
        assert entry.amount == Decimal("40")
        assert compute_balance(account.statement) == Decimal("60")

    def test_insufficient_funds_no_mutation(self, account):
        """Rejected withdrawal leaves statement untouched"""
        record_deposit(account, "Pix", Decimal("100"))

        with pytest.raises(InsufficientFundsError, match="Insufficient funds!"):
            record_withdraw(account, Decimal("150"))

        assert len(account.statement) == 1
        assert compute_balance(account.statement) == Decimal("100")

    def test_withdraw_entire_balance(self, account):
        record_deposit(account, "Pix", Decimal("100"))
        record_withdraw(account, Decimal("100"))

        assert compute_balance(account.statement) == Decimal("0")

    def test_withdraw_from_empty_account(self, account):
        with pytest.raises(InsufficientFundsError):
            record_withdraw(account, Decimal("0.01"))
        assert account.statement == []

    def test_balance_after_mixed_operations(self, account):
        """Balance equals deposits minus withdrawals"""
        deposits = [Decimal("100"), Decimal("25.50"), Decimal("300")]
        withdrawals = [Decimal("50"), Decimal("75.25"), Decimal("200")]

        for amount in deposits:
            record_deposit(account, "in", amount)
        for amount in withdrawals:
            record_withdraw(account, amount)

        assert compute_balance(account.statement) == sum(deposits) - sum(withdrawals)

    def test_ana_scenario(self, account):
        record_deposit(account, "Pix", 100)
        assert compute_balance(account.statement) == Decimal("100")

        with pytest.raises(InsufficientFundsError):
            record_withdraw(account, 150)
        assert compute_balance(account.statement) == Decimal("100")

        record_withdraw(account, 40)
        assert compute_balance(account.statement) == Decimal("60")


class TestFilterByDate:
    """Test calendar day filtering"""

    def test_matches_only_requested_day(self):
        day = date(2024, 5, 10)
        statement = [
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("1"), created_at=local_noon(day - timedelta(days=1))),
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("2"), created_at=local_noon(day)),
            StatementEntry(type=EntryType.DEBIT, amount=Decimal("3"), created_at=local_noon(day)),
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("4"), created_at=local_noon(day + timedelta(days=1))),
        ]

        result = filter_by_date(statement, day)

        assert [e.amount for e in result] == [Decimal("2"), Decimal("3")]

    def test_day_boundaries_in_local_time(self):
        day = date(2024, 5, 10)
        start = datetime(2024, 5, 10, 0, 0, 0).astimezone()
        end = datetime(2024, 5, 10, 23, 59, 59).astimezone()
        after = datetime(2024, 5, 11, 0, 0, 0).astimezone()
        statement = [
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("1"), created_at=start),
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("2"), created_at=end),
            StatementEntry(type=EntryType.CREDIT, amount=Decimal("3"), created_at=after),
        ]

        assert [e.amount for e in filter_by_date(statement, day)] == [Decimal("1"), Decimal("2")]

    def test_utc_timestamps_compared_in_local_time(self):
        day = date(2024, 5, 10)
        created = local_noon(day).astimezone(timezone.utc)
        statement = [StatementEntry(type=EntryType.CREDIT, amount=Decimal("1"), created_at=created)]

        assert len(filter_by_date(statement, day)) == 1

    def test_none_matches_nothing(self, account):
        record_deposit(account, "Pix", 10)

        assert filter_by_date(account.statement, None) == []

    def test_today(self, account):
        record_deposit(account, "Pix", 10)
        today = datetime.now().astimezone().date()

        assert len(filter_by_date(account.statement, today)) == 1


class TestParseStatementDate:

    def test_valid(self):
        assert parse_statement_date("2024-05-10") == date(2024, 5, 10)

    @pytest.mark.parametrize("value", [None, "", "not-a-date", "2024-13-01", "10/05/2024"])
    def test_malformed_is_none(self, value):
        assert parse_statement_date(value) is None


class TestSeeding:
    """Test demo statement seeding"""

    def test_seeds_six_entries(self, account):
        now = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)

        assert seed_simulated_entries(account, now=now) is True

        assert len(account.statement) == 6
        assert [e.description for e in account.statement] == [d for _, d, _, _ in SIMULATED_ENTRIES]
        assert [e.created_at for e in account.statement] == [
            now - timedelta(days=n) for n in (5, 4, 3, 2, 1, 0)
        ]
        assert sum(1 for e in account.statement if e.is_credit) == 3
        assert sum(1 for e in account.statement if e.is_debit) == 3
        assert compute_balance(account.statement) == Decimal("4332.35")

    def test_idempotent(self, account):
        seed_simulated_entries(account)

        assert seed_simulated_entries(account) is False
        assert len(account.statement) == 6

    def test_sentinel_from_any_entry(self, account):
        record_deposit(account, SEED_SENTINEL, 1)

        assert seed_simulated_entries(account) is False
        assert len(account.statement) == 1


class TestSimulate:
    """Test the simulate summary"""

    def test_fresh_cpf(self):
        store = AccountStore()

        summary = simulate(store, "555", default_name="Cliente Demo")

        assert summary["message"] == "Simulation applied"
        assert summary["cpf"] == "555"
        assert summary["name"] == "Cliente Demo"
        assert summary["balance"] == Decimal("4332.35")
        assert summary["operations"] == 6
        assert len(summary["statementSample"]) == 5
        assert summary["statementSample"][-1]["description"] == "Bônus"
        assert store.exists("555")

    def test_custom_name(self):
        store = AccountStore()

        assert simulate(store, "555", name="Fulano")["name"] == "Fulano"

    def test_repeat_without_reset(self):
        store = AccountStore()
        simulate(store, "555")

        summary = simulate(store, "555")

        assert summary["operations"] == 6

    def test_reset_clears_then_seeds(self):
        store = AccountStore()
        account = store.create("555", "Ana")
        record_deposit(account, "Pix", 100)
        simulate(store, "555")
        assert len(account.statement) == 7

        summary = simulate(store, "555", reset=True)

        assert summary["operations"] == 6
        assert summary["name"] == "Ana"
        assert summary["balance"] == Decimal("4332.35")

    def test_existing_account_seeded_on_top(self):
        store = AccountStore()
        account = store.create("555", "Ana")
        record_deposit(account, "Pix", 100)

        summary = simulate(store, "555")

        assert summary["operations"] == 7
        assert summary["balance"] == Decimal("4432.35")

    @pytest.mark.parametrize("cpf", [None, ""])
    def test_missing_cpf(self, cpf):
        store = AccountStore()

        with pytest.raises(MissingInputError, match="cpf is required"):
            simulate(store, cpf)
        assert len(store) == 0
