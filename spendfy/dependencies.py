from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from spendfy.crud import crud_user
from spendfy.db.core import get_db, UserDB
from spendfy.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> UserDB:
    """
    Resolve the caller from the bearer token.

    A missing, malformed, expired or forged token is answered with 403. A
    valid token whose subject no longer exists is answered with 404.
    """
    email = decode_access_token(credentials.credentials if credentials else None)
    if email is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authenticated")

    user = crud_user.read_db_user(db, email=email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def get_current_user_id(current_user: UserDB = Depends(get_current_user)) -> int:
    return current_user.id
