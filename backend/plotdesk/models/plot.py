from sqlalchemy import Column, String, Boolean, Float, Integer, Text, Enum as SQLEnum

from plotdesk.core.constants import PlotFacing, PlotStatus, UPLOADED_IMAGE_HINT
from plotdesk.core.database import Base


class Plot(Base):
    """Plot listing"""
    __tablename__ = "plots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plot_number = Column(String(50), nullable=False)
    village_name = Column(String(100), nullable=False)
    area_name = Column(String(100), nullable=False)
    plot_size = Column(String(100), nullable=False)
    plot_facing = Column(SQLEnum(PlotFacing), nullable=False)

    # Self-contained data: URL, can be several MB
    image_url = Column(Text, nullable=False)
    image_hint = Column(String(100), default=UPLOADED_IMAGE_HINT, nullable=False)

    description = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    price_per_sqft = Column(Integer, nullable=True)
    price_negotiable = Column(Boolean, default=False, nullable=False)
    status = Column(SQLEnum(PlotStatus), default=PlotStatus.AVAILABLE, nullable=False)

    def __repr__(self):
        return f"<Plot {self.plot_number} ({self.village_name})>"
