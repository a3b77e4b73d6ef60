from sqlalchemy import Column, String, Enum as SQLEnum, Integer

from plotdesk.core.constants import ContactType
from plotdesk.core.database import Base


class Contact(Base):
    """Seller or buyer"""
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    type = Column(SQLEnum(ContactType), nullable=False)
    notes = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<Contact {self.name} ({self.type})>"
