from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from spendfy.crud import crud_category
from spendfy.models import category as category_models
from spendfy.db.core import get_db
from spendfy.dependencies import get_current_user_id
from spendfy.exceptions import NotFoundError

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
)

@router.post("/", response_model=category_models.CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category: category_models.CategoryRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Create a new category for the current user.
    """
    try:
        return crud_category.create_db_category(db=db, user_id=user_id, category_data=category)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/", response_model=List[category_models.CategoryResponse])
def read_categories(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve all categories for the current user.
    """
    try:
        return crud_category.read_db_categories(db=db, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("/{category_id}", response_model=category_models.CategoryResponse)
def read_category(
    category_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve a specific category by its ID.
    """
    try:
        return crud_category.read_db_category(db=db, category_id=category_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{category_id}", response_model=category_models.CategoryResponse)
def update_category(
    category_id: int,
    category: category_models.CategoryRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Update a category.
    """
    try:
        return crud_category.update_db_category(
            db=db, category_id=category_id, user_id=user_id, category_data=category
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Delete a category together with its budgets and transactions.
    """
    try:
        crud_category.delete_db_category(db=db, category_id=category_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
