"""
Demo endpoint seeding sample transactions
"""

from typing import Optional
from fastapi import APIRouter, Depends

from .auth import get_settings, get_store
from .schemas import SimulateRequest
from ..accounts import AccountStore
from ..config import FinAPIConfig
from ..ledger import simulate


router = APIRouter()


@router.post("")
async def simulate_transactions(
    request: Optional[SimulateRequest] = None,
    store: AccountStore = Depends(get_store),
    settings: FinAPIConfig = Depends(get_settings)
):
    """
    Seed six sample entries spread over the last five days

    Creates the account when missing. With ``reset`` the statement is cleared
    first. Seeding is skipped if the statement already holds the sample salary.
    """
    request = request or SimulateRequest()
    return simulate(
        store,
        cpf=request.cpf,
        name=request.name,
        reset=request.reset,
        default_name=settings.simulate_default_name
    )
