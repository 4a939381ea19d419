"""
Contexts API endpoints.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from activity_planner import crud
from activity_planner.clock import current_moment
from activity_planner.database import get_db
from activity_planner.schemas import ContextCreate, ContextRead, ContextUpdate

router = APIRouter(prefix="/contexts", tags=["contexts"])


@router.get("", response_model=List[ContextRead])
def list_contexts(
    active: bool = Query(default=False, description="Only contexts whose window contains now"),
    db: Session = Depends(get_db)
):
    """Get all contexts, or only the active ones"""
    if active:
        return crud.get_active_contexts(db, current_moment())
    return crud.get_contexts(db)


@router.post("", status_code=201)
def create_context(payload: ContextCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    context = crud.create_context(db, payload)
    return {"success": True, "id": context.id}


@router.put("/{context_id}")
def update_context(context_id: int, payload: ContextUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    if not crud.update_context(db, context_id, payload):
        raise HTTPException(status_code=404, detail=f"Context {context_id} not found")
    return {"success": True}


@router.delete("/{context_id}")
def delete_context(context_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    if not crud.delete_context(db, context_id):
        raise HTTPException(status_code=404, detail=f"Context {context_id} not found")
    return {"success": True}
