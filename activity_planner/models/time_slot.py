from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from activity_planner.database import Base

class TimeSlot(Base):
    """Activity-specific recurring weekly window"""
    __tablename__ = "time_slots"
    
    id = Column(Integer, primary_key=True, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(String)  # "Mon".."Sun", NULL for every day
    time_start = Column(String, nullable=False)  # "HH:MM"
    time_end = Column(String, nullable=False)
    
    activity = relationship("Activity", back_populates="time_slots")
