from sqlalchemy import Column, String, Boolean, DateTime, Integer
from datetime import datetime

from plotdesk.core.database import Base


class Registration(Base):
    """Lead from the public registration form"""
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    notes = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    is_new = Column(Boolean, default=True, nullable=False, index=True)

    def __repr__(self):
        return f"<Registration {self.email}>"
