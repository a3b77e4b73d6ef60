from pydantic import Field
from typing import Any, List, Literal, Optional

from plotdesk.core.constants import PlotFacing
from plotdesk.schemas.base import CamelModel


class PlotAttributes(CamelModel):
    plot_number: Optional[str] = None
    village_name: Optional[str] = None
    area_name: str
    plot_size: str
    plot_facing: PlotFacing


class LocationRequest(CamelModel):
    location: str = Field(..., min_length=1)


class FutureDevelopmentRequest(CamelModel):
    image_data_url: str
    location: str = Field(..., min_length=1)


class VastuAnalysis(CamelModel):
    vastu_rating: Literal["Excellent", "Good", "Average", "Poor"]
    analysis_summary: str
    positive_points: List[str] = []
    negative_points: List[str] = []


class NearbyAmenities(CamelModel):
    schools: List[str] = []
    hospitals: List[str] = []
    markets: List[str] = []
    transport: List[str] = []


class MarketInsights(CamelModel):
    hotspot_area: str
    trending_opportunity: str
    investment_teaser: str


class GenerationResult(CamelModel):
    """Outcome of an optional AI call - unavailable instead of raising"""
    available: bool
    data: Optional[Any] = None
    error: Optional[str] = None
