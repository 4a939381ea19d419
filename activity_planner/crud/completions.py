from sqlalchemy.orm import Session
from activity_planner.models import Activity, ActivityCompletion
from activity_planner.clock import current_moment
from activity_planner.errors import NotFoundError
from datetime import datetime
from typing import List, Optional

def complete_activity(
    db: Session,
    activity_id: int,
    notes: Optional[str] = None,
    completed_at: Optional[datetime] = None
) -> ActivityCompletion:
    """
    Log that an activity was done.
    
    Recurring activities stay open so they can be suggested again;
    one-off activities are marked completed.
    """
    activity = db.query(Activity).filter(Activity.id == activity_id).first()
    if not activity:
        raise NotFoundError(f"Activity {activity_id} not found")
    
    completion = ActivityCompletion(
        activity_id=activity_id,
        completed_at=completed_at or current_moment(),
        notes=notes
    )
    db.add(completion)
    
    if not activity.is_recurring:
        activity.is_completed = True
    
    db.commit()
    db.refresh(completion)
    return completion

def get_activity_completions(db: Session, activity_id: int) -> List[ActivityCompletion]:
    """Completion log for an activity, newest first"""
    return db.query(ActivityCompletion).filter(
        ActivityCompletion.activity_id == activity_id
    ).order_by(ActivityCompletion.completed_at.desc()).all()
