"""
Pydantic schemas for API requests
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class CreateAccountRequest(BaseModel):
    cpf: str
    name: str


class UpdateAccountRequest(BaseModel):
    name: str


class DepositRequest(BaseModel):
    description: Optional[str] = None
    amount: Decimal = Field(..., ge=0, description="Amount to credit")


class WithdrawRequest(BaseModel):
    amount: Decimal = Field(..., ge=0, description="Amount to debit")


class SimulateRequest(BaseModel):
    cpf: Optional[str] = None
    name: Optional[str] = None
    reset: bool = False
