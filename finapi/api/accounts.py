"""
Account management endpoints
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from .auth import get_customer, get_store
from .schemas import CreateAccountRequest, UpdateAccountRequest
from ..accounts import Account, AccountStore
from ..exceptions import AccountNotFoundError


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_account(
    request: CreateAccountRequest,
    store: AccountStore = Depends(get_store)
):
    """Create a new account"""
    store.create(request.cpf, request.name)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("")
async def get_account(customer: Account = Depends(get_customer)):
    """Get account details"""
    return customer.to_dict()


@router.put("")
async def update_account(
    request: UpdateAccountRequest,
    customer: Account = Depends(get_customer),
    store: AccountStore = Depends(get_store)
):
    """Update the account holder's name"""
    store.update(customer.cpf, request.name)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("")
async def delete_account(
    customer: Account = Depends(get_customer),
    store: AccountStore = Depends(get_store)
):
    """Delete the account and its statement"""
    try:
        store.delete(customer.cpf)
    except AccountNotFoundError as e:
        # Removed between lookup and deletion
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": e.message})

    return {"message": "Account deleted"}
