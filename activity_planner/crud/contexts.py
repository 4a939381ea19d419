from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from activity_planner.models import Context
from activity_planner.schemas import ContextCreate, ContextUpdate
from activity_planner.errors import ConflictError, ValidationError
from activity_planner.time_windows import active_contexts
from datetime import datetime
from typing import List, Optional

def _weekday_values(days) -> Optional[List[str]]:
    return [day.value for day in days] if days is not None else None

def get_contexts(db: Session) -> List[Context]:
    """Get all contexts ordered by name"""
    return db.query(Context).order_by(Context.name.asc()).all()

def get_context(db: Session, context_id: int) -> Optional[Context]:
    """Get context by ID"""
    return db.query(Context).filter(Context.id == context_id).first()

def get_active_contexts(db: Session, now: datetime) -> List[Context]:
    """Contexts whose window contains `now`"""
    return active_contexts(get_contexts(db), now)

def create_context(db: Session, context: ContextCreate) -> Context:
    """Create a new context"""
    db_context = Context(
        name=context.name,
        label=context.label,
        days=_weekday_values(context.days),
        time_start=context.time_start,
        time_end=context.time_end
    )
    db.add(db_context)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Context '{context.name}' already exists")
    db.refresh(db_context)
    return db_context

def update_context(db: Session, context_id: int, data: ContextUpdate) -> Optional[Context]:
    """
    Update the fields present in the payload.
    
    Sending `days: null` resets the context to every day; sending null time
    bounds makes it all day. Name and label cannot be blanked.
    """
    db_context = get_context(db, context_id)
    if not db_context:
        return None
    
    updates = data.model_dump(exclude_unset=True)
    for key in ("name", "label"):
        if key in updates and updates[key] is not None:
            setattr(db_context, key, updates[key])
    if "days" in updates:
        db_context.days = _weekday_values(data.days)
    if "time_start" in updates:
        db_context.time_start = updates["time_start"]
    if "time_end" in updates:
        db_context.time_end = updates["time_end"]
    
    if (db_context.time_start is None) != (db_context.time_end is None):
        db.rollback()
        raise ValidationError("time_start and time_end must be set together")
    
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Context '{data.name}' already exists")
    db.refresh(db_context)
    return db_context

def delete_context(db: Session, context_id: int) -> bool:
    """Delete context; links to activities are removed with it"""
    db_context = get_context(db, context_id)
    if not db_context:
        return False
    db.delete(db_context)
    db.commit()
    return True
