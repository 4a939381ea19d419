from activity_planner.crud.categories import (
    get_categories,
    get_category,
    create_category,
    update_category,
    delete_category
)
from activity_planner.crud.contexts import (
    get_contexts,
    get_context,
    get_active_contexts,
    create_context,
    update_context,
    delete_context
)
from activity_planner.crud.activities import (
    get_activities,
    get_activity,
    create_activity,
    update_activity,
    delete_activity,
    toggle_activity,
    to_detail
)
from activity_planner.crud.completions import complete_activity, get_activity_completions
from activity_planner.crud.suggestions import get_suggestions

__all__ = [
    "get_categories",
    "get_category",
    "create_category",
    "update_category",
    "delete_category",
    "get_contexts",
    "get_context",
    "get_active_contexts",
    "create_context",
    "update_context",
    "delete_context",
    "get_activities",
    "get_activity",
    "create_activity",
    "update_activity",
    "delete_activity",
    "toggle_activity",
    "to_detail",
    "complete_activity",
    "get_activity_completions",
    "get_suggestions",
]
