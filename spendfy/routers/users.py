from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from spendfy.crud import crud_user
from spendfy.models import user as user_models
from spendfy.db.core import get_db, UserDB
from spendfy.dependencies import get_current_user
from spendfy.exceptions import NotFoundError

router = APIRouter(
    prefix="/users",
    tags=["users"],
)

@router.get("/me", response_model=user_models.UserResponse)
def read_current_user(current_user: UserDB = Depends(get_current_user)):
    """
    Retrieve the authenticated user's profile.
    """
    return current_user

@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_current_user(
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete the authenticated user and everything they own.
    """
    try:
        crud_user.delete_db_user(db=db, user_id=current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
