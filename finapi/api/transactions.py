"""
Transaction endpoints
"""

from fastapi import APIRouter, Depends, Response, status

from .auth import get_customer
from .schemas import DepositRequest, WithdrawRequest
from ..accounts import Account
from ..ledger import record_deposit, record_withdraw


router = APIRouter()


@router.post("/deposit", status_code=status.HTTP_201_CREATED)
async def deposit(
    request: DepositRequest,
    customer: Account = Depends(get_customer)
):
    """Make a deposit"""
    record_deposit(customer, request.description, request.amount)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/withdraw", status_code=status.HTTP_201_CREATED)
async def withdraw(
    request: WithdrawRequest,
    customer: Account = Depends(get_customer)
):
    """Make a withdrawal"""
    record_withdraw(customer, request.amount)
    return Response(status_code=status.HTTP_201_CREATED)
