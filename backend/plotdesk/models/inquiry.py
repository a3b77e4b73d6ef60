from sqlalchemy import Column, String, DateTime, Integer, Text
from datetime import datetime

from plotdesk.core.database import Base


class Inquiry(Base):
    """Visitor message about a plot"""
    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plot_number = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    received_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Inquiry {self.plot_number} from {self.email}>"
