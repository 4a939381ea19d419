from datetime import datetime
from sqlalchemy.orm import Session
from activity_planner.config import settings
from activity_planner.crud.activities import get_activities, to_detail
from activity_planner.crud.contexts import get_contexts, get_active_contexts
from activity_planner.schemas import ContextRead
from activity_planner.suggestions import ScoredActivity, SuggestionEngine
from typing import List, Optional

def get_suggestions(
    db: Session,
    now: datetime,
    limit: Optional[int] = None,
    category_id: Optional[int] = None
) -> List[ScoredActivity]:
    """
    Load activities and contexts and rank them for `now`.

    With active_context_source "store" the database decides which contexts
    are active; otherwise all contexts go to the engine to evaluate.
    """
    activities = [to_detail(a) for a in get_activities(db, category_id=category_id)]

    if settings.active_context_source == "store":
        active = [ContextRead.model_validate(c) for c in get_active_contexts(db, now)]
        return SuggestionEngine.get_suggestions(
            activities, now, active_contexts=active, limit=limit, category_id=category_id
        )

    contexts = [ContextRead.model_validate(c) for c in get_contexts(db)]
    return SuggestionEngine.get_suggestions(
        activities, now, contexts=contexts, limit=limit, category_id=category_id
    )
