from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from activity_planner.database import Base

class Category(Base):
    """Grouping for activities (e.g. Ocio, Bienestar)"""
    __tablename__ = "categories"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    color = Column(String, nullable=False)  # hex color for badges
    icon = Column(String)
    created_at = Column(DateTime, default=datetime.now)
    
    activities = relationship("Activity", back_populates="category")
