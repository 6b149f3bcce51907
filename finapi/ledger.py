"""
Ledger Module

Balance and statement rules for a single account. The balance is never
stored; it is always folded from the statement, credits adding and debits
subtracting.
"""

from decimal import Decimal, InvalidOperation
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from .accounts import Account, AccountStore, EntryType, StatementEntry
from .exceptions import InsufficientFundsError, InvalidInputError, MissingInputError
from .logging_config import get_logger, log_action


logger = get_logger("finapi.ledger")

# Description marking a statement that has already been seeded
SEED_SENTINEL = "Salário"

# (days ago, description, amount, type), applied in this order
SIMULATED_ENTRIES = [
    (5, SEED_SENTINEL, Decimal("3500"), EntryType.CREDIT),
    (4, "Supermercado", Decimal("420.75"), EntryType.DEBIT),
    (3, "Café", Decimal("12"), EntryType.DEBIT),
    (2, "Transferência recebida", Decimal("500"), EntryType.CREDIT),
    (1, "Streaming", Decimal("34.9"), EntryType.DEBIT),
    (0, "Bônus", Decimal("800"), EntryType.CREDIT),
]

STATEMENT_SAMPLE_SIZE = 5


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _to_amount(amount: Union[Decimal, int, float, str]) -> Decimal:
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            raise InvalidInputError(f"Invalid amount: {amount!r}")
    if not value.is_finite():
        raise InvalidInputError(f"Invalid amount: {amount!r}")
    if value < 0:
        raise InvalidInputError("Amount must not be negative")
    return value


def compute_balance(statement: Iterable[StatementEntry]) -> Decimal:
    """Sum of credits minus sum of debits"""
    balance = Decimal("0")
    for entry in statement:
        if entry.is_credit:
            balance += entry.amount
        else:
            balance -= entry.amount
    return balance


def record_deposit(account: Account, description: Optional[str],
                   amount: Union[Decimal, int, float, str]) -> StatementEntry:
    """Append a credit entry to the account statement"""
    entry = StatementEntry(
        type=EntryType.CREDIT,
        amount=_to_amount(amount),
        created_at=_now(),
        description=description
    )
    account.statement.append(entry)

    log_action(
        logger, "info", "Deposit recorded",
        action="deposit", resource=f"account:{account.id}",
        extra={"amount": str(entry.amount), "description": description}
    )
    return entry


def record_withdraw(account: Account, amount: Union[Decimal, int, float, str]) -> StatementEntry:
    """
    Append a debit entry to the account statement

    Raises:
        InsufficientFundsError: if the amount exceeds the current balance.
            The statement is left unchanged.
    """
    value = _to_amount(amount)
    balance = compute_balance(account.statement)

    if balance < value:
        log_action(
            logger, "warning", "Withdrawal rejected: insufficient funds",
            action="withdraw", resource=f"account:{account.id}",
            extra={"amount": str(value), "balance": str(balance)}
        )
        raise InsufficientFundsError()

    entry = StatementEntry(type=EntryType.DEBIT, amount=value, created_at=_now())
    account.statement.append(entry)

    log_action(
        logger, "info", "Withdrawal recorded",
        action="withdraw", resource=f"account:{account.id}",
        extra={"amount": str(value), "balance": str(balance - value)}
    )
    return entry


def parse_statement_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD query value

    Malformed or missing input gives None, which matches no entry.
    """
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        logger.warning(f"Unparseable statement date: {value!r}")
        return None


def filter_by_date(statement: Iterable[StatementEntry], day: Optional[date]) -> List[StatementEntry]:
    """
    Entries created on the given calendar day, in local time

    Compared by year, month and day fields rather than formatted strings.
    """
    if day is None:
        return []

    result = []
    for entry in statement:
        local = entry.created_at.astimezone()
        if (local.year, local.month, local.day) == (day.year, day.month, day.day):
            result.append(entry)
    return result


def seed_simulated_entries(account: Account, now: Optional[datetime] = None) -> bool:
    """
    Append the fixed demo entries unless they are already present

    Returns:
        True if entries were appended, False if the statement was already seeded
    """
    if any(entry.description == SEED_SENTINEL for entry in account.statement):
        return False

    now = now or _now()
    for days_ago, description, amount, entry_type in SIMULATED_ENTRIES:
        account.statement.append(StatementEntry(
            type=entry_type,
            amount=amount,
            created_at=now - timedelta(days=days_ago),
            description=description
        ))

    log_action(
        logger, "info", "Simulated entries seeded",
        action="seed_statement", resource=f"account:{account.id}",
        extra={"entries": len(SIMULATED_ENTRIES)}
    )
    return True


def simulate(store: AccountStore, cpf: Optional[str], name: Optional[str] = None,
             reset: bool = False, default_name: str = "Cliente Demo") -> Dict[str, Any]:
    """
    Find or create the account, seed demo entries, and summarize the result
    """
    if not cpf:
        raise MissingInputError("cpf is required")

    account = store.find_or_create(cpf, name or default_name, reset=reset)
    seed_simulated_entries(account)

    return {
        "message": "Simulation applied",
        "cpf": account.cpf,
        "name": account.name,
        "balance": compute_balance(account.statement),
        "operations": len(account.statement),
        "statementSample": [entry.to_dict() for entry in account.statement[-STATEMENT_SAMPLE_SIZE:]]
    }
