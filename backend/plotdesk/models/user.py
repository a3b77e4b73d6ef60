from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer
from datetime import datetime

from plotdesk.core.constants import UserRole
from plotdesk.core.database import Base


class User(Base):
    """Dashboard login"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User {self.email}>"


class Password(Base):
    """Credential keyed by email, kept apart from the user row"""
    __tablename__ = "passwords"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Password {self.email}>"
