from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from activity_planner.database import Base

class ActivityCompletion(Base):
    """Append-only log of each time an activity was done"""
    __tablename__ = "activity_completions"
    
    id = Column(Integer, primary_key=True, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False)
    completed_at = Column(DateTime, nullable=False, default=datetime.now)
    notes = Column(String)
    
    activity = relationship("Activity", back_populates="completions")
