import pytest
from pydantic import ValidationError

from activity_planner.schemas import (
    ActivityCreate,
    ActivityUpdate,
    CategoryCreate,
    ContextCreate,
    Priority,
    TimeSlotCreate,
    Weekday,
)


class TestActivityCreate:
    def test_title_is_trimmed(self):
        assert ActivityCreate(title="  Leer  ").title == "Leer"

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_rejected(self, title):
        with pytest.raises(ValidationError):
            ActivityCreate(title=title)

    def test_defaults(self):
        activity = ActivityCreate(title="Leer")
        assert activity.priority == Priority.SOMEDAY
        assert activity.is_recurring is False
        assert activity.contexts == []
        assert activity.time_slots == []

    def test_recurring_needs_type(self):
        with pytest.raises(ValidationError):
            ActivityCreate(title="Regar plantas", is_recurring=True)

    def test_non_recurring_drops_type(self):
        assert ActivityCreate(title="Leer", recurrence_type="weekly").recurrence_type is None

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValidationError):
            ActivityCreate(title="Leer", priority="asap")

    def test_blank_description_becomes_none(self):
        assert ActivityCreate(title="Leer", description="  ").description is None


class TestActivityUpdate:
    def test_blank_title_normalizes_to_none(self):
        assert ActivityUpdate(title="   ").title is None

    def test_only_sent_fields_are_set(self):
        assert ActivityUpdate(priority="urgent").model_dump(exclude_unset=True) == {"priority": Priority.URGENT}


class TestTimes:
    @pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "12.30", "noon"])
    def test_time_slot_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            TimeSlotCreate(time_start=value, time_end="23:00")

    def test_time_slot_requires_both_bounds(self):
        with pytest.raises(ValidationError):
            TimeSlotCreate(time_start="", time_end="10:00")

    def test_time_slot_day_is_weekday(self):
        assert TimeSlotCreate(day_of_week="Mon", time_start="08:00", time_end="10:00").day_of_week == Weekday.MON
        with pytest.raises(ValidationError):
            TimeSlotCreate(day_of_week="Monday", time_start="08:00", time_end="10:00")

    def test_crossing_midnight_is_valid(self):
        slot = TimeSlotCreate(time_start="23:00", time_end="05:00")
        assert (slot.time_start, slot.time_end) == ("23:00", "05:00")


class TestContextCreate:
    def test_all_day_every_day(self):
        context = ContextCreate(name="siempre", label="Siempre")
        assert context.days is None
        assert context.time_start is None and context.time_end is None

    def test_empty_times_mean_all_day(self):
        context = ContextCreate(name="finde", label="Fin de semana", days=["Sat", "Sun"], time_start="", time_end="")
        assert context.time_start is None

    def test_single_bound_rejected(self):
        with pytest.raises(ValidationError):
            ContextCreate(name="x", label="X", time_start="09:00")

    def test_invalid_day_rejected(self):
        with pytest.raises(ValidationError):
            ContextCreate(name="x", label="X", days=["Lun"])

    def test_blank_label_rejected(self):
        with pytest.raises(ValidationError):
            ContextCreate(name="x", label=" ")


def test_category_requires_color():
    with pytest.raises(ValidationError):
        CategoryCreate(name="Ocio", color="")
