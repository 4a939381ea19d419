"""
Activities API endpoints.

CRUD over activities plus the completion log used by the recency rules.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from activity_planner import crud
from activity_planner.database import get_db
from activity_planner.logging import get_logger
from activity_planner.schemas import (
    ActivityCreate,
    ActivityUpdate,
    CompletionCreate,
    CompletionRead,
    EnergyLevel,
    Priority,
    TimeOfDay,
)
from activity_planner.suggestions import activities_by_time_of_day

logger = get_logger(__name__)

router = APIRouter(prefix="/activities", tags=["activities"])


def _not_found(activity_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Activity {activity_id} not found")


@router.get("")
def list_activities(
    category_id: Optional[int] = Query(default=None),
    priority: Optional[Priority] = Query(default=None),
    energy: Optional[EnergyLevel] = Query(default=None),
    time_of_day: Optional[TimeOfDay] = Query(default=None, description="Only open activities scheduled in this part of the day"),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """Get all activities, optionally filtered by category, priority, energy level or time of day"""
    activities = crud.get_activities(
        db,
        category_id=category_id,
        priority=priority.value if priority else None,
        energy_level=energy.value if energy else None,
    )
    details = [crud.to_detail(a) for a in activities]
    if time_of_day:
        details = activities_by_time_of_day(details, time_of_day)
    return {"success": True, "data": details}


@router.post("", status_code=201)
def create_activity(payload: ActivityCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Create an activity with its contexts and time slots"""
    activity = crud.create_activity(db, payload)
    logger.info("activity_created", activity_id=activity.id)
    return {"success": True, "id": activity.id}


@router.get("/{activity_id}")
def get_activity(activity_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    activity = crud.get_activity(db, activity_id)
    if not activity:
        raise _not_found(activity_id)
    return {"success": True, "data": crud.to_detail(activity)}


@router.put("/{activity_id}")
def update_activity(activity_id: int, payload: ActivityUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Update the fields sent; contexts and time_slots replace the whole set"""
    if not crud.update_activity(db, activity_id, payload):
        raise _not_found(activity_id)
    return {"success": True}


@router.delete("/{activity_id}")
def delete_activity(activity_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    if not crud.delete_activity(db, activity_id):
        raise _not_found(activity_id)
    logger.info("activity_deleted", activity_id=activity_id)
    return {"success": True}


@router.post("/{activity_id}/complete")
def complete_activity(
    activity_id: int,
    payload: Optional[CompletionCreate] = Body(default=None),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """Log a completion; one-off activities are also marked done"""
    notes = payload.notes if payload else None
    completion = crud.complete_activity(db, activity_id, notes=notes)
    logger.info("activity_completed", activity_id=activity_id, completion_id=completion.id)
    return {"success": True, "id": completion.id}


@router.post("/{activity_id}/toggle")
def toggle_activity(activity_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Flip the completed flag"""
    activity = crud.toggle_activity(db, activity_id)
    if not activity:
        raise _not_found(activity_id)
    return {"success": True, "is_completed": activity.is_completed}


@router.get("/{activity_id}/completions", response_model=List[CompletionRead])
def list_completions(activity_id: int, db: Session = Depends(get_db)):
    if not crud.get_activity(db, activity_id):
        raise _not_found(activity_id)
    return crud.get_activity_completions(db, activity_id)
