from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Sequence

from activity_planner.clock import local_zone
from activity_planner.config import settings
from activity_planner.logging import get_logger
from activity_planner.schemas import EnergyLevel, Priority, RecurrenceType, TimeOfDay
from activity_planner.time_windows import TimeWindow, active_contexts as evaluate_contexts, matches, time_code, weekday_code

logger = get_logger(__name__)

CONTEXT_POINTS = 50
TIME_SLOT_POINTS = 60
PRIORITY_POINTS = {
    Priority.URGENT: 40,
    Priority.IMPORTANT: 25,
    Priority.SOMEDAY: 10,
}
PRIORITY_REASONS = {
    Priority.URGENT: "Must Do",
    Priority.IMPORTANT: "Should Do",
}
DAILY_PENDING_POINTS = 20
ENERGY_POINTS = 15
RECENT_PENALTY = 30  # completed under 2 hours ago
RECENT_SOFT_PENALTY = 15  # completed under 6 hours ago

# (first hour, end hour exclusive, energy level, reason)
ENERGY_BRACKETS = (
    (6, 12, EnergyLevel.HIGH, "Energía alta - ideal ahora"),
    (12, 18, EnergyLevel.MEDIUM, "Energía media - ideal ahora"),
    (18, 24, EnergyLevel.LOW, "Energía baja - ideal ahora"),
)

REASON_SEPARATOR = " • "

TIME_OF_DAY_RANGES = {
    TimeOfDay.MORNING: ("06:00", "12:00"),
    TimeOfDay.AFTERNOON: ("12:00", "18:00"),
    TimeOfDay.EVENING: ("18:00", "23:00"),
    TimeOfDay.NIGHT: ("23:00", "06:00"),
}


@dataclass
class ScoredActivity:
    """An activity that survived the relevance gate, with its score and why"""
    activity: Any
    score: int
    reasons: List[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        return REASON_SEPARATOR.join(self.reasons)


def _align(moment: datetime, now: datetime) -> datetime:
    """Bring a stored timestamp onto the same naive/aware convention as `now`"""
    if now.tzinfo is None:
        # naive `now` is wall-clock time in the configured zone
        if moment.tzinfo is not None:
            return moment.astimezone(local_zone()).replace(tzinfo=None)
        return moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=now.tzinfo)
    return moment.astimezone(now.tzinfo)


def score_activity(activity, active: Sequence, now: datetime) -> Optional[ScoredActivity]:
    """
    Score one activity for the moment `now`.

    Rules are applied in a fixed order and each one that fires appends its
    reason. Activities with no contexts and no time slots cannot be timed,
    and activities whose contexts/slots do not cover `now` are not relevant;
    both return None and must be left out of the ranking.

    Args:
        activity: Activity with contexts, time_slots and last_completed populated
        active: Contexts active at `now` (see time_windows.active_contexts)
        now: The instant being evaluated, read once by the caller

    Returns:
        ScoredActivity, or None when the activity is skipped
    """
    contexts = activity.contexts or []
    time_slots = activity.time_slots or []
    if not contexts and not time_slots:
        return None

    score = 0
    reasons: List[str] = []
    day = weekday_code(now)
    time = time_code(now)

    matched = False
    if contexts:
        active_ids = {context.id for context in active}
        hit = next((context for context in contexts if context.id in active_ids), None)
        if hit is not None:
            score += CONTEXT_POINTS
            reasons.append(f"Contexto: {hit.label}")
            matched = True

    for slot in time_slots:
        if matches(TimeWindow(slot.day_of_week, slot.time_start, slot.time_end), day, time):
            score += TIME_SLOT_POINTS
            reasons.append(f"Horario: {slot.time_start}-{slot.time_end}")
            matched = True
            break

    if not matched:
        return None

    priority = Priority(activity.priority) if activity.priority else Priority.SOMEDAY
    score += PRIORITY_POINTS[priority]
    if priority in PRIORITY_REASONS:
        reasons.append(PRIORITY_REASONS[priority])

    last_completed = activity.last_completed
    if last_completed is not None:
        last_completed = _align(last_completed, now)

    if (
        activity.is_recurring
        and activity.recurrence_type
        and RecurrenceType(activity.recurrence_type) == RecurrenceType.DAILY
        and (last_completed is None or last_completed.date() != now.date())
    ):
        score += DAILY_PENDING_POINTS
        reasons.append("Pendiente hoy")

    if activity.energy_level:
        energy = EnergyLevel(activity.energy_level)
        for first_hour, end_hour, level, reason in ENERGY_BRACKETS:
            if first_hour <= now.hour < end_hour and energy == level:
                score += ENERGY_POINTS
                reasons.append(reason)
                break

    if last_completed is not None:
        hours_since = (now - last_completed).total_seconds() / 3600
        if hours_since < 2:
            score -= RECENT_PENALTY
            reasons.append("Completada recientemente")
        elif hours_since < 6:
            score -= RECENT_SOFT_PENALTY

    return ScoredActivity(activity=activity, score=score, reasons=reasons)


def suggest(
    activities: Sequence,
    active: Sequence,
    now: datetime,
    limit: int = 10,
    category_id: Optional[int] = None
) -> List[ScoredActivity]:
    """
    Rank activities for `now`, best first.

    Completed activities and those outside `category_id` (when given) are
    filtered out before scoring; skipped activities never appear. Equal
    scores keep their input order. An empty list is a normal answer.
    """
    if limit <= 0:
        return []

    candidates = [
        activity for activity in activities
        if not activity.is_completed
        and (category_id is None or activity.category_id == category_id)
    ]

    scored = []
    for activity in candidates:
        result = score_activity(activity, active, now)
        if result is not None:
            scored.append(result)

    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:limit]


def activities_by_time_of_day(activities: Sequence, time_of_day) -> List:
    """
    Open activities scheduled inside a named part of the day.

    An activity with time slots qualifies when one of its slots sits inside
    the range; only activities without slots fall back to their bounded
    contexts. Bounds are compared as HH:MM strings, so the night range only
    holds windows that start at 23:00 or later and end by 06:00.

    Args:
        activities: Activities with contexts and time_slots populated
        time_of_day: TimeOfDay member or its string value

    Returns:
        The qualifying activities, in input order
    """
    start, end = TIME_OF_DAY_RANGES[TimeOfDay(time_of_day)]

    def inside(time_start, time_end) -> bool:
        return bool(time_start and time_end) and time_start >= start and time_end <= end

    selected = []
    for activity in activities:
        if activity.is_completed:
            continue
        if activity.time_slots:
            if any(inside(slot.time_start, slot.time_end) for slot in activity.time_slots):
                selected.append(activity)
        elif any(inside(context.time_start, context.time_end) for context in activity.contexts or []):
            selected.append(activity)
    return selected


class SuggestionEngine:
    """
    Entry point used by the API and CLI.

    Accepts either the precomputed list of active contexts or the full list of
    contexts, in which case activation is evaluated once for `now`.
    """

    @staticmethod
    def get_suggestions(
        activities: Sequence,
        now: datetime,
        *,
        contexts: Optional[Sequence] = None,
        active_contexts: Optional[Sequence] = None,
        limit: Optional[int] = None,
        category_id: Optional[int] = None
    ) -> List[ScoredActivity]:
        if active_contexts is None:
            active_contexts = evaluate_contexts(contexts or [], now)
        if limit is None:
            limit = settings.suggestion_limit

        results = suggest(activities, active_contexts, now, limit=limit, category_id=category_id)
        logger.debug(
            "suggestions_ranked",
            candidates=len(activities),
            active_contexts=len(active_contexts),
            returned=len(results),
            day=weekday_code(now),
            time=time_code(now),
        )
        return results
