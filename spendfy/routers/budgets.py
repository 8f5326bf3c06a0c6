from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from spendfy.crud import crud_budget
from spendfy.models import budget as budget_models
from spendfy.db.core import get_db
from spendfy.dependencies import get_current_user_id
from spendfy.exceptions import NotFoundError

router = APIRouter(
    prefix="/budgets",
    tags=["budgets"],
)

@router.post("/", response_model=budget_models.BudgetResponse, status_code=status.HTTP_201_CREATED)
def create_budget(
    budget: budget_models.BudgetRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Create a budget for one of the current user's categories.
    Fails with 400 if the period is inverted or overlaps another budget
    of the same category.
    """
    try:
        return crud_budget.create_db_budget(db=db, user_id=user_id, budget_data=budget)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/", response_model=List[budget_models.BudgetResponse])
def read_budgets(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve all budgets for the current user.
    """
    try:
        return crud_budget.read_db_budgets(db=db, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("/{budget_id}", response_model=budget_models.BudgetResponse)
def read_budget(
    budget_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Retrieve a specific budget by its ID.
    """
    try:
        return crud_budget.read_db_budget(db=db, budget_id=budget_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{budget_id}", response_model=budget_models.BudgetResponse)
def update_budget(
    budget_id: int,
    budget: budget_models.BudgetRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Update a budget's limit, period or category. The budget being updated
    is not counted as an overlap with itself.
    """
    try:
        return crud_budget.update_db_budget(
            db=db, budget_id=budget_id, user_id=user_id, budget_data=budget
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget(
    budget_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Delete a budget.
    """
    try:
        crud_budget.delete_db_budget(db=db, budget_id=budget_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
