"""
Account Management Module

Holds the account data model and the in-memory account store. Accounts are
keyed by CPF and carry their own statement of credit and debit entries;
balances are always derived from that statement by the ledger module.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
from enum import Enum
import uuid

from .exceptions import AccountNotFoundError, DuplicateAccountError
from .logging_config import get_logger, log_action


class EntryType(Enum):
    """Statement entry types"""
    CREDIT = "credit"  # Increases balance
    DEBIT = "debit"    # Decreases balance


@dataclass
class StatementEntry:
    """
    Single line of an account statement
    """
    type: EntryType
    amount: Decimal
    created_at: datetime
    description: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            self.amount = Decimal(str(self.amount))

    @property
    def is_credit(self) -> bool:
        return self.type == EntryType.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.type == EntryType.DEBIT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary"""
        result: Dict[str, Any] = {}
        if self.description is not None:
            result["description"] = self.description
        result["amount"] = self.amount
        result["created_at"] = self.created_at.isoformat()
        result["type"] = self.type.value
        return result


@dataclass
class Account:
    """
    Bank account identified by CPF
    """
    cpf: str
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    statement: List[StatementEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary"""
        return {
            "cpf": self.cpf,
            "name": self.name,
            "id": self.id,
            "statement": [entry.to_dict() for entry in self.statement]
        }


class AccountStore:
    """
    In-memory registry of accounts

    The store is the only authority on whether an account exists. It is built
    once per application and dropped with it.
    """

    def __init__(self):
        self._accounts: List[Account] = []
        self.logger = get_logger("finapi.accounts")

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(list(self._accounts))

    def _find(self, cpf: str) -> Optional[Account]:
        for account in self._accounts:
            if account.cpf == cpf:
                return account
        return None

    def exists(self, cpf: str) -> bool:
        """Check if an account exists for the CPF"""
        return self._find(cpf) is not None

    def create(self, cpf: str, name: str) -> Account:
        """
        Create a new account

        Args:
            cpf: Tax ID, unique across the store
            name: Display name

        Returns:
            Created Account object

        Raises:
            DuplicateAccountError: if the CPF is already registered
        """
        if self.exists(cpf):
            raise DuplicateAccountError()

        account = Account(cpf=cpf, name=name)
        self._accounts.append(account)

        log_action(
            self.logger, "info", "Account created",
            action="create_account", resource=f"account:{account.id}",
            extra={"cpf": cpf, "name": name}
        )
        return account

    def find_by_cpf(self, cpf: str) -> Account:
        """Get account by CPF (exact, case-sensitive match)"""
        account = self._find(cpf)
        if account is None:
            raise AccountNotFoundError()
        return account

    def update(self, cpf: str, name: str) -> Account:
        """Replace the account name, leaving id and statement untouched"""
        account = self.find_by_cpf(cpf)
        old_name = account.name
        account.name = name

        log_action(
            self.logger, "info", "Account updated",
            action="update_account", resource=f"account:{account.id}",
            extra={"old_name": old_name, "new_name": name}
        )
        return account

    def delete(self, cpf: str) -> None:
        """Remove the account and its whole statement"""
        for index, account in enumerate(self._accounts):
            if account.cpf == cpf:
                del self._accounts[index]
                log_action(
                    self.logger, "info", "Account deleted",
                    action="delete_account", resource=f"account:{account.id}",
                    extra={"cpf": cpf, "entries": len(account.statement)}
                )
                return
        raise AccountNotFoundError()

    def find_or_create(self, cpf: str, default_name: str, reset: bool = False) -> Account:
        """
        Get the account for the CPF, creating it when missing

        An existing account keeps its name; with ``reset`` its statement is
        cleared first.
        """
        account = self._find(cpf)
        if account is None:
            return self.create(cpf, default_name)

        if reset:
            account.statement = []
            log_action(
                self.logger, "info", "Statement reset",
                action="reset_statement", resource=f"account:{account.id}"
            )
        return account

    def clear(self) -> None:
        """Drop every account"""
        self._accounts.clear()
