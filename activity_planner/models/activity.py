from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Table
from sqlalchemy.orm import relationship
from datetime import datetime
from activity_planner.database import Base

activity_contexts = Table(
    "activity_contexts",
    Base.metadata,
    Column("activity_id", Integer, ForeignKey("activities.id", ondelete="CASCADE"), primary_key=True),
    Column("context_id", Integer, ForeignKey("contexts.id", ondelete="CASCADE"), primary_key=True),
)

class Activity(Base):
    """Something the user may want to do, with its scheduling metadata"""
    __tablename__ = "activities"
    
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"))
    
    duration_minutes = Column(Integer)
    energy_level = Column(String)  # "low", "medium", "high"
    location = Column(String)
    priority = Column(String, nullable=False, default="someday")  # "urgent", "important", "someday"
    
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurrence_type = Column(String)  # "daily", "weekly", "monthly"
    is_completed = Column(Boolean, nullable=False, default=False)
    
    created_at = Column(DateTime, default=datetime.now)
    
    category = relationship("Category", back_populates="activities")
    contexts = relationship("Context", secondary=activity_contexts, back_populates="activities", order_by="Context.id")
    time_slots = relationship(
        "TimeSlot",
        back_populates="activity",
        cascade="all, delete-orphan",
        order_by="TimeSlot.id"
    )
    completions = relationship(
        "ActivityCompletion",
        back_populates="activity",
        cascade="all, delete-orphan",
        order_by="ActivityCompletion.completed_at"
    )
    
    @property
    def completions_count(self) -> int:
        return len(self.completions)
    
    @property
    def last_completed(self):
        if not self.completions:
            return None
        return max(c.completed_at for c in self.completions)
