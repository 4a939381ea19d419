from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from activity_planner.database import Base

class Context(Base):
    """Named recurring weekly time window shared across activities"""
    __tablename__ = "contexts"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    label = Column(String, nullable=False)
    days = Column(JSON)  # ["Mon", "Tue", ...] or NULL for every day
    time_start = Column(String)  # "HH:MM", NULL for all day
    time_end = Column(String)
    created_at = Column(DateTime, default=datetime.now)
    
    activities = relationship("Activity", secondary="activity_contexts", back_populates="contexts")
