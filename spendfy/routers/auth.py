from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from spendfy.crud import crud_user
from spendfy.models import user as user_models
from spendfy.db.core import get_db
from spendfy.exceptions import AuthenticationFailedError

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)

@router.post("/register", response_model=user_models.AuthResponse)
def register(user: user_models.RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user and return an access token.
    """
    try:
        return crud_user.register_user(db=db, user_data=user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.post("/login", response_model=user_models.AuthResponse)
def login(credentials: user_models.LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate a user and return an access token.
    """
    try:
        return crud_user.login_user(db=db, credentials=credentials)
    except AuthenticationFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
