"""
Statement and balance endpoints
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from .auth import get_customer
from ..accounts import Account
from ..ledger import compute_balance, filter_by_date, parse_statement_date


router = APIRouter()


@router.get("/statement")
async def get_statement(customer: Account = Depends(get_customer)):
    """Full statement in insertion order"""
    return [entry.to_dict() for entry in customer.statement]


@router.get("/statement/date")
async def get_statement_by_date(
    day: Optional[str] = Query(None, alias="date", description="Calendar day, YYYY-MM-DD"),
    customer: Account = Depends(get_customer)
):
    """Statement entries created on one calendar day"""
    entries = filter_by_date(customer.statement, parse_statement_date(day))
    return [entry.to_dict() for entry in entries]


@router.get("/balance")
async def get_balance(customer: Account = Depends(get_customer)):
    """Current balance"""
    return compute_balance(customer.statement)
