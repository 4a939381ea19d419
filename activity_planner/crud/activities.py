from sqlalchemy import case
from sqlalchemy.orm import Session, selectinload
from activity_planner.models import Activity, Category, Context, TimeSlot
from activity_planner.schemas import ActivityCreate, ActivityUpdate, ActivityDetail, TimeSlotCreate
from activity_planner.errors import NotFoundError, ValidationError
from activity_planner.logging import get_logger
from typing import List, Optional

logger = get_logger(__name__)

# Most urgent first, matching the order suggestions fall back to on ties
_PRIORITY_ORDER = case(
    (Activity.priority == "urgent", 0),
    (Activity.priority == "important", 1),
    else_=2
)

def _load_options():
    return (
        selectinload(Activity.category),
        selectinload(Activity.contexts),
        selectinload(Activity.time_slots),
        selectinload(Activity.completions),
    )

def _resolve_contexts(db: Session, context_ids: List[int]) -> List[Context]:
    if not context_ids:
        return []
    unique_ids = list(dict.fromkeys(context_ids))
    contexts = db.query(Context).filter(Context.id.in_(unique_ids)).all()
    found = {c.id for c in contexts}
    missing = [cid for cid in unique_ids if cid not in found]
    if missing:
        raise NotFoundError(f"Unknown context ids: {missing}")
    by_id = {c.id: c for c in contexts}
    return [by_id[cid] for cid in unique_ids]

def _check_category(db: Session, category_id: Optional[int]):
    if category_id is not None and not db.query(Category).filter(Category.id == category_id).first():
        raise NotFoundError(f"Unknown category id: {category_id}")

def _build_slots(slots: List[TimeSlotCreate]) -> List[TimeSlot]:
    return [
        TimeSlot(
            day_of_week=slot.day_of_week.value if slot.day_of_week else None,
            time_start=slot.time_start,
            time_end=slot.time_end
        )
        for slot in slots
    ]

def to_detail(activity: Activity) -> ActivityDetail:
    """Snapshot an ORM activity into the shape the suggestion engine reads"""
    return ActivityDetail.model_validate(activity)

def get_activities(
    db: Session,
    category_id: Optional[int] = None,
    priority: Optional[str] = None,
    energy_level: Optional[str] = None
) -> List[Activity]:
    """Get activities with relationships loaded, most urgent and newest first"""
    query = db.query(Activity).options(*_load_options())
    
    if category_id is not None:
        query = query.filter(Activity.category_id == category_id)
    if priority:
        query = query.filter(Activity.priority == priority)
    if energy_level:
        query = query.filter(Activity.energy_level == energy_level)
    
    return query.order_by(_PRIORITY_ORDER, Activity.created_at.desc(), Activity.id.desc()).all()

def get_activity(db: Session, activity_id: int) -> Optional[Activity]:
    """Get activity by ID"""
    return db.query(Activity).options(*_load_options()).filter(Activity.id == activity_id).first()

def create_activity(db: Session, activity: ActivityCreate) -> Activity:
    """Create activity together with its context links and time slots"""
    _check_category(db, activity.category_id)
    contexts = _resolve_contexts(db, activity.contexts)
    
    db_activity = Activity(
        title=activity.title,
        description=activity.description,
        category_id=activity.category_id,
        duration_minutes=activity.duration_minutes,
        energy_level=activity.energy_level.value if activity.energy_level else None,
        location=activity.location,
        priority=activity.priority.value,
        is_recurring=activity.is_recurring,
        recurrence_type=activity.recurrence_type.value if activity.recurrence_type else None
    )
    db_activity.contexts = contexts
    db_activity.time_slots = _build_slots(activity.time_slots)
    db.add(db_activity)
    db.commit()
    db.refresh(db_activity)
    
    if not contexts and not activity.time_slots:
        logger.info("activity_unschedulable", activity_id=db_activity.id, title=db_activity.title)
    return db_activity

def update_activity(db: Session, activity_id: int, data: ActivityUpdate) -> Optional[Activity]:
    """Update the fields present in the payload"""
    db_activity = get_activity(db, activity_id)
    if not db_activity:
        return None
    
    updates = data.model_dump(exclude_unset=True)

    # Lookups first so a failed one leaves the row untouched
    if "category_id" in updates:
        _check_category(db, data.category_id)
    contexts = _resolve_contexts(db, data.contexts) if data.contexts is not None else None

    if "title" in updates and data.title is not None:
        db_activity.title = data.title
    for key in ("description", "duration_minutes", "location"):
        if key in updates:
            setattr(db_activity, key, updates[key])
    if "category_id" in updates:
        db_activity.category_id = data.category_id
    if "energy_level" in updates:
        db_activity.energy_level = data.energy_level.value if data.energy_level else None
    if "priority" in updates and data.priority is not None:
        db_activity.priority = data.priority.value
    if "is_recurring" in updates and data.is_recurring is not None:
        db_activity.is_recurring = data.is_recurring
    if "recurrence_type" in updates:
        db_activity.recurrence_type = data.recurrence_type.value if data.recurrence_type else None
    if "is_completed" in updates and data.is_completed is not None:
        db_activity.is_completed = data.is_completed
    
    if not db_activity.is_recurring:
        db_activity.recurrence_type = None
    elif db_activity.recurrence_type is None:
        db.rollback()
        raise ValidationError("recurring activities need a recurrence_type")
    
    if contexts is not None:
        db_activity.contexts = contexts
    if data.time_slots is not None:
        db_activity.time_slots = _build_slots(data.time_slots)
    
    db.commit()
    db.refresh(db_activity)
    return db_activity

def delete_activity(db: Session, activity_id: int) -> bool:
    """Delete activity with its slots and completion log"""
    db_activity = get_activity(db, activity_id)
    if not db_activity:
        return False
    db.delete(db_activity)
    db.commit()
    return True

def toggle_activity(db: Session, activity_id: int) -> Optional[Activity]:
    """Flip the completion flag"""
    db_activity = get_activity(db, activity_id)
    if db_activity:
        db_activity.is_completed = not db_activity.is_completed
        db.commit()
        db.refresh(db_activity)
    return db_activity
