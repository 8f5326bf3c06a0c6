from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from spendfy.crud import crud_transaction
from spendfy.models import transaction as transaction_models
from spendfy.db.core import get_db
from spendfy.dependencies import get_current_user_id
from spendfy.exceptions import NotFoundError

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
)

@router.post("/", response_model=transaction_models.TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction: transaction_models.TransactionRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Create a new transaction for the current user.
    """
    try:
        return crud_transaction.create_db_transaction(db=db, user_id=user_id, transaction_data=transaction)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/", response_model=List[transaction_models.TransactionResponse])
def read_transactions(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve all transactions for the current user.
    """
    try:
        return crud_transaction.read_db_transactions(db=db, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("/{transaction_id}", response_model=transaction_models.TransactionResponse)
def read_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve a specific transaction by its ID.
    """
    try:
        return crud_transaction.read_db_transaction(db=db, transaction_id=transaction_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{transaction_id}", response_model=transaction_models.TransactionResponse)
def update_transaction(
    transaction_id: int,
    transaction: transaction_models.TransactionRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Update a transaction.
    """
    try:
        return crud_transaction.update_db_transaction(
            db=db, transaction_id=transaction_id, user_id=user_id, transaction_data=transaction
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Delete a transaction.
    """
    try:
        crud_transaction.delete_db_transaction(db=db, transaction_id=transaction_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
