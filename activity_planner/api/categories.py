"""
Categories API endpoints.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from activity_planner import crud
from activity_planner.database import get_db
from activity_planner.schemas import CategoryCreate, CategoryRead, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryRead])
def list_categories(db: Session = Depends(get_db)):
    return crud.get_categories(db)


@router.post("", status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    category = crud.create_category(db, payload)
    return {"success": True, "id": category.id}


@router.put("/{category_id}")
def update_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    if not crud.update_category(db, category_id, payload):
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return {"success": True}


@router.delete("/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Delete a category; its activities become uncategorized"""
    if not crud.delete_category(db, category_id):
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return {"success": True}
