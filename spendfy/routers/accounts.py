from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from spendfy.crud import crud_account
from spendfy.models import account as account_models
from spendfy.db.core import get_db
from spendfy.dependencies import get_current_user_id
from spendfy.exceptions import NotFoundError

router = APIRouter(
    prefix="/accounts",
    tags=["accounts"],
)

@router.post("/", response_model=account_models.AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    account: account_models.AccountRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Create a new account for the current user.
    """
    try:
        return crud_account.create_db_account(db=db, user_id=user_id, account_data=account)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/", response_model=List[account_models.AccountResponse])
def read_accounts(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve all accounts for the current user.
    """
    try:
        return crud_account.read_db_accounts(db=db, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("/{account_id}", response_model=account_models.AccountResponse)
def read_account(
    account_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve a specific account by its ID.
    """
    try:
        return crud_account.read_db_account(db=db, account_id=account_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{account_id}", response_model=account_models.AccountResponse)
def update_account(
    account_id: int,
    account: account_models.AccountRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Update an account.
    """
    try:
        return crud_account.update_db_account(
            db=db, account_id=account_id, user_id=user_id, account_data=account
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Delete an account together with its transactions.
    """
    try:
        crud_account.delete_db_account(db=db, account_id=account_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
