from activity_planner.models.category import Category
from activity_planner.models.context import Context
from activity_planner.models.activity import Activity, activity_contexts
from activity_planner.models.time_slot import TimeSlot
from activity_planner.models.completion import ActivityCompletion

__all__ = [
    "Category",
    "Context",
    "Activity",
    "activity_contexts",
    "TimeSlot",
    "ActivityCompletion"
]
