"""
Request dependencies: account store access and CPF header lookup
"""

from typing import Optional
from fastapi import Depends, Header, Request

from ..accounts import Account, AccountStore
from ..config import FinAPIConfig
from ..exceptions import AccountNotFoundError


def get_store(request: Request) -> AccountStore:
    """Account store owned by the running application"""
    return request.app.state.store


def get_settings(request: Request) -> FinAPIConfig:
    return request.app.state.settings


def get_customer(
    cpf: Optional[str] = Header(None),
    store: AccountStore = Depends(get_store)
) -> Account:
    """Resolve the account named by the ``cpf`` header"""
    if not cpf:
        raise AccountNotFoundError()
    return store.find_by_cpf(cpf)
