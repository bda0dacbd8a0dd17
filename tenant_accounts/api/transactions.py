"""Ledger endpoints, scoped to the caller's own tenant storage."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tenant_accounts.api.dependencies import get_context, get_current_claims
from tenant_accounts.context import ServiceContext
from tenant_accounts.models.tenant import Transaction
from tenant_accounts.schemas.auth import ErrorResponse
from tenant_accounts.schemas.transaction import TransactionCreate, TransactionResponse
from tenant_accounts.services.tokens import SessionClaims

router = APIRouter(
    prefix="/api/v1/transactions",
    tags=["transactions"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)


@router.get("", response_model=list[TransactionResponse])
def list_transactions(
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
    context: Annotated[ServiceContext, Depends(get_context)],
):
    """List the caller's transactions, oldest first."""
    with context.provisioner.session(claims.storage_pointer) as db:
        transactions = db.query(Transaction).order_by(Transaction.id).all()
        return [TransactionResponse.model_validate(t) for t in transactions]


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    data: TransactionCreate,
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
    context: Annotated[ServiceContext, Depends(get_context)],
):
    """Append a transaction to the caller's ledger."""
    with context.provisioner.session(claims.storage_pointer) as db:
        transaction = Transaction(**data.model_dump())
        db.add(transaction)
        db.commit()
        db.refresh(transaction)
        return TransactionResponse.model_validate(transaction)
